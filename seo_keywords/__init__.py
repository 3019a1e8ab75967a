"""SEO keyword suggestion engine with search history analytics."""

__version__ = "1.0.0"
