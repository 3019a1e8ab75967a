"""Key/value row model backing the persistent storage collaborator."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from seo_keywords.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageItem(Base):
    """One string value stored under a fixed key (history blob, settings blob)."""

    __tablename__ = "storage_items"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    def __repr__(self) -> str:
        return f"<StorageItem key={self.key!r} len={len(self.value)}>"
