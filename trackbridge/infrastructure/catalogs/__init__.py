"""Target catalog implementations."""

from .memory import InMemoryCatalog, load_records

__all__ = ["InMemoryCatalog", "load_records"]
