"""Unit tests for the database layer.

Entity defaults and repository queries run against in-memory SQLite.
"""
