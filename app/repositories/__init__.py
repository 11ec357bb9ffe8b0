"""Data access layer built on BaseRepository."""
