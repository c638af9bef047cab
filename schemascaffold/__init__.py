"""schemascaffold -- generate REST application skeletons from a database schema."""

__version__ = "0.1.0"
