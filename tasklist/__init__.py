"""Task-list backend: soft-deletable tasks behind a small HTTP API."""

__version__ = "0.1.0"
