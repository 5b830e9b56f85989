from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum

from app.schemas.game import Difficulty


class ThemePreference(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class ColorPalette(str, Enum):
    EARTH = "earth"
    SUNSET = "sunset"
    MODERN = "modern"


class GameSettings(BaseModel):
    default_ai_difficulty: Difficulty = Difficulty.MEDIUM
    haptic_feedback: bool = True
    sound_effects: bool = False
    theme: ThemePreference = ThemePreference.SYSTEM
    color_palette: ColorPalette = ColorPalette.EARTH
    alternate_first_player: bool = False
    default_player_x_name: str = Field("Player 1", min_length=1, max_length=50)
    default_player_o_name: str = Field("Player 2", min_length=1, max_length=50)
    confirm_reset: bool = True


class SettingsUpdate(BaseModel):
    default_ai_difficulty: Optional[Difficulty] = None
    haptic_feedback: Optional[bool] = None
    sound_effects: Optional[bool] = None
    theme: Optional[ThemePreference] = None
    color_palette: Optional[ColorPalette] = None
    alternate_first_player: Optional[bool] = None
    default_player_x_name: Optional[str] = Field(None, min_length=1, max_length=50)
    default_player_o_name: Optional[str] = Field(None, min_length=1, max_length=50)
    confirm_reset: Optional[bool] = None
