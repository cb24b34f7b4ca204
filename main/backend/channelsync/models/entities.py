from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from .base import Base


class SelectionEntry(Base):
    """Serialized selection mapping of one channel, keyed ``<namespace>:<channel>``."""

    __tablename__ = "selection_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
