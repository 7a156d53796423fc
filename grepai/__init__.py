"""Semantic code search: vector stores, hybrid ranking, symbol indexing and file watching."""

__version__ = "0.1.0"