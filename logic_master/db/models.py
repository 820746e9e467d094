"""SQLAlchemy models for the Logic Master key-value store."""
from datetime import datetime
from sqlalchemy import Column, Text, DateTime
from logic_master.db.database import Base


class StoredBlob(Base):
    """One JSON document stored under a string key.

    The player profile lives under a single key; daily challenges are cached
    under one key per calendar date.
    """
    __tablename__ = "stored_blobs"

    key = Column(Text, primary_key=True)  # e.g. "logicMasterUserData", "daily_challenge_2025-01-31"
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
