"""hostcheck - assert facts about the running host."""

__version__ = "0.1.0"
