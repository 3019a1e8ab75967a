"""Feature modules: keyword generation and search history."""
