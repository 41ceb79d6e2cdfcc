"""
Top-level package for the CSV knowledge-base retriever.

This package reads a business listing and an FAQ knowledge base from
CSV files, builds an in-memory TF-IDF index over them and answers
free-text questions with a templated, retrieval-only reply.  There are
no side-effects on import; the HTTP app lives in :mod:`csvrag.api` and
the command line in :mod:`csvrag.cli`.
"""
from __future__ import annotations

from .answer import Answer
from .config import EngineConfig
from .engine import RetrievalEngine, init, query
from .errors import CsvRagError, EngineNotReady, LoadError, ParseError
from .index import Index

__version__ = "1.0.0"

__all__ = [
    "Answer",
    "CsvRagError",
    "EngineConfig",
    "EngineNotReady",
    "Index",
    "LoadError",
    "ParseError",
    "RetrievalEngine",
    "init",
    "query",
]
