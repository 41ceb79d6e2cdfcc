"""
Exception types raised by the retriever.

``ParseError`` and ``LoadError`` surface from :func:`csvrag.engine.init`
as a single failed outcome; no partial index is ever produced.  Query
paths have no error channel of their own.
"""

from __future__ import annotations

from typing import Optional


class CsvRagError(Exception):
    """Base class for all retriever errors."""


class ParseError(CsvRagError):
    """Source content could not be read as text."""


class LoadError(CsvRagError):
    """A source could not be fetched, read, or parsed into a header row."""

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message)
        self.location = location


class EngineNotReady(CsvRagError):
    """The engine was queried before any index was built."""
