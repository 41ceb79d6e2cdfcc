from __future__ import annotations

"""
Text normalization used for both indexed documents and user queries.

Keeping tokenization in one place guarantees that a query term and a
document term are produced by exactly the same rules: lowercase, strip
everything but ASCII letters, digits and whitespace, drop one-letter
tokens and stopwords.  There is no stemming and no synonym expansion.
"""

import re
from typing import Iterator, List, Optional

from .config import MIN_TOKEN_LENGTH, STOPWORDS

NON_WORD_RE = re.compile(r"[^a-z0-9\s]")
WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: Optional[str]) -> str:
    """
    Collapse all whitespace runs into a single space and strip edges.
    """
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text).strip()


def iter_tokens(text: Optional[str]) -> Iterator[str]:
    """Lazily yield index terms from ``text`` in input order."""
    if not text:
        return
    cleaned = NON_WORD_RE.sub(" ", str(text).lower())
    for tok in cleaned.split():
        if len(tok) < MIN_TOKEN_LENGTH or tok in STOPWORDS:
            continue
        yield tok


def tokenize(text: Optional[str]) -> List[str]:
    """
    Return the index terms of ``text`` as a list.

    Unlike :func:`iter_tokens` the result can be iterated any number of
    times, which the indexer relies on (one pass for counts, one for
    document frequency).
    """
    return list(iter_tokens(text))


if __name__ == "__main__":
    sample = "What are your fees for a custody consultation in Austin, TX?"
    print("RAW:", sample)
    print("TOKENS:", tokenize(sample))
