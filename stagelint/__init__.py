"""Commit-time lint hook for staged changes, plus a tag-file generator."""

__version__ = "0.1.0"
