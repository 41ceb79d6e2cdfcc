from __future__ import annotations

"""
TF-IDF index construction.

Every document is turned into a sparse term vector weighted with
sublinear term frequency and smoothed inverse document frequency, as
computed by scikit-learn's ``TfidfVectorizer``:

* ``tf(t)  = 1 + ln(count)``
* ``idf(t) = ln((N + 1) / (df(t) + 1)) + 1``
* ``w(t)   = tf(t) * idf(t)``

Vectors are left unnormalized (``norm=None``); cosine similarity divides
by the norms stored next to each vector instead.

The resulting :class:`Index` is immutable.  Rebuilding from new data
produces a new value; nothing ever writes into an existing one, so a
built index can be shared by any number of concurrent readers.  Query
vectors go through the same fitted vectorizer, which only transforms
and never refits.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from loguru import logger
from sklearn.feature_extraction.text import TfidfVectorizer

from .corpus import Document
from .normalize import tokenize

# Norm used for vectors without any recognized term
NORM_FLOOR = 1.0

EMPTY_WEIGHTS: Mapping[str, float] = MappingProxyType({})


@dataclass(frozen=True)
class TermVector:
    weights: Mapping[str, float]
    norm: float = NORM_FLOOR

    def __len__(self) -> int:
        return len(self.weights)


EMPTY_VECTOR = TermVector(weights=EMPTY_WEIGHTS)


def vector_norm(weights: Iterable[float]) -> float:
    """Euclidean norm, floored so callers can always divide by it."""
    norm = math.sqrt(math.fsum(w * w for w in weights))
    return norm or NORM_FLOOR


def new_vectorizer() -> TfidfVectorizer:
    return TfidfVectorizer(
        tokenizer=tokenize,
        lowercase=False,
        token_pattern=None,
        smooth_idf=True,
        sublinear_tf=True,
        norm=None,
    )


def _row_vector(matrix, row: int, columns: Sequence[str]) -> TermVector:
    start, end = matrix.indptr[row], matrix.indptr[row + 1]
    weights: Dict[str, float] = {
        columns[col]: float(w)
        for col, w in zip(matrix.indices[start:end], matrix.data[start:end])
        if w
    }
    if not weights:
        return EMPTY_VECTOR
    return TermVector(
        weights=MappingProxyType(weights),
        norm=vector_norm(weights.values()),
    )


@dataclass(frozen=True)
class Index:
    vectors: Tuple[Tuple[TermVector, Document], ...]
    idf: Mapping[str, float]
    n: int
    vectorizer: Optional[TfidfVectorizer] = field(default=None, compare=False, repr=False)
    columns: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    @property
    def documents(self) -> Tuple[Document, ...]:
        return tuple(doc for _, doc in self.vectors)

    def __len__(self) -> int:
        return self.n

    def vectorize(self, text: Optional[str]) -> TermVector:
        """
        Weight ``text`` against this index's idf table.

        Terms the corpus never saw get no entry, so they neither match
        nor dilute the vector.
        """
        if self.vectorizer is None or not text:
            return EMPTY_VECTOR
        matrix = self.vectorizer.transform([text]).tocsr()
        return _row_vector(matrix, 0, self.columns)


def build_index(documents: Iterable[Document]) -> Index:
    """Build an immutable TF-IDF index over ``documents`` in one pass."""
    docs = list(documents)
    texts = [d.text for d in docs]

    if not any(tokenize(t) for t in texts):
        # TfidfVectorizer refuses an empty vocabulary
        logger.warning("No index terms in {} documents; index is empty", len(docs))
        return Index(
            vectors=tuple((EMPTY_VECTOR, doc) for doc in docs),
            idf=MappingProxyType({}),
            n=len(docs),
        )

    vectorizer = new_vectorizer()
    matrix = vectorizer.fit_transform(texts).tocsr()
    columns = tuple(vectorizer.get_feature_names_out().tolist())

    # vocabulary_ is a plain dict; sorted column order keeps idf reproducible
    idf = {term: float(vectorizer.idf_[col]) for col, term in enumerate(columns)}

    vectors = tuple(
        (_row_vector(matrix, row, columns), doc) for row, doc in enumerate(docs)
    )
    logger.info("Built TF-IDF index: {} documents, {} terms", len(docs), len(idf))
    return Index(
        vectors=vectors,
        idf=MappingProxyType(idf),
        n=len(docs),
        vectorizer=vectorizer,
        columns=columns,
    )
