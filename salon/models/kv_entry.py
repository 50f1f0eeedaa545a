"""KeyValueEntry model - one JSON document per storage key."""
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from salon.database import Base


class KeyValueEntry(Base):
    """Row backing a single key of the key-value store."""

    __tablename__ = 'kv_entry'

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<KeyValueEntry(key='{self.key}')>"
