"""Nutrition tracking data store: SQLite-backed CRUD for ingredients, meals and recipes."""

__version__ = "0.1.0"
