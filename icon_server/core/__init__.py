"""Icon resolution and caching engine."""
