"""SQLAlchemy ORM models; import every model so Base.metadata is populated."""

from seo_keywords.models.storage import StorageItem

__all__ = ["StorageItem"]
