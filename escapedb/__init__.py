"""JSON settings and an embedded SQLite-backed store for escape-room games and events."""

__version__ = "0.1.0"