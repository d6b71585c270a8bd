"""SQL-backed repository implementations."""
