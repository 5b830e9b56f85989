from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from app.core.database import Base


class StorageEntry(Base):
    __tablename__ = "storage_entries"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # JSON payload
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
