from __future__ import annotations

"""
Query-time scoring against a built :class:`~csvrag.index.Index`.

A query is vectorized with the corpus idf table (the index is never
touched), scored against every document by cosine similarity, ranked,
cut at :data:`~csvrag.config.MIN_SCORE` and truncated to ``k``.

Example::

    from csvrag.retrieval import retrieve
    for hit in retrieve(index, "custody fees", k=2):
        print(hit.rank, hit.label, f"{hit.score:.3f}")

"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .config import DEFAULT_TOP_K, MIN_SCORE
from .corpus import BusinessDoc, Document, FaqDoc
from .index import Index, TermVector


@dataclass(frozen=True)
class Hit:
    document: Document
    score: float
    rank: int

    @property
    def label(self) -> str:
        return source_label(self.document)


def source_label(document: Document) -> str:
    """Short citation for a document, shown next to the answer."""
    meta = document.metadata
    if isinstance(meta, FaqDoc):
        return f"FAQ: {meta.topic or 'entry'}"
    if isinstance(meta, BusinessDoc):
        return f"Biz: {meta.name or 'entry'}"
    return f"Doc: {document.id}"


def vectorize_query(text: Optional[str], index: Index) -> TermVector:
    return index.vectorize(text)


def cosine_similarity(q: TermVector, d: TermVector) -> float:
    """Cosine of two sparse vectors; 0.0 when they share no term."""
    small, large = (q, d) if len(q) <= len(d) else (d, q)
    dot = math.fsum(
        w * large.weights[t] for t, w in small.weights.items() if t in large.weights
    )
    return dot / (q.norm * d.norm)


def score_documents(index: Index, text: str) -> List[Tuple[Document, float]]:
    """Score every indexed document against ``text``, in index order."""
    q = vectorize_query(text, index)
    return [(doc, cosine_similarity(q, vec)) for vec, doc in index.vectors]


def retrieve(index: Index, text: str, k: int = DEFAULT_TOP_K) -> List[Hit]:
    """
    Return at most ``k`` hits scoring above ``MIN_SCORE``, best first.

    Ties keep ingestion order.  An empty list is a normal outcome (no
    recognized terms, or nothing similar enough).
    """
    if k < 1:
        raise ValueError(f"k must be a positive integer, got {k}")

    scored = score_documents(index, text)
    order = sorted(range(len(scored)), key=lambda i: (-scored[i][1], i))

    hits: List[Hit] = []
    for i in order:
        doc, score = scored[i]
        if score <= MIN_SCORE:
            # sorted descending, nothing after this can pass
            break
        hits.append(Hit(document=doc, score=score, rank=len(hits) + 1))
        if len(hits) >= k:
            break

    logger.debug("Query {!r}: {} hits of {} documents", text, len(hits), index.n)
    return hits
