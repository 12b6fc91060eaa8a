"""Book storage and recommendation HTTP API backed by SQLite and Flask."""

__version__ = "1.0.0"