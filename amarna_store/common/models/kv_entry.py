from sqlalchemy import Column, DateTime, String, Text, func
from .base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_entry"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
