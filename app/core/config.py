from pydantic_settings import BaseSettings
import os

class Settings(BaseSettings):
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./tictactoe.db"
    )
    DEBUG: bool = os.getenv("DEBUG", "False") == "True"
    # Seconds the computer waits before answering a human move
    AI_MOVE_DELAY: float = float(os.getenv("AI_MOVE_DELAY", "0.5"))

    class Config:
        env_file = ".env"

settings = Settings()
