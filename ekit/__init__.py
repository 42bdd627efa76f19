"""General-purpose helpers: typed values, column helpers for databases and synchronisation primitives."""

__version__ = "0.1.0"