from __future__ import annotations

"""
Projection of parsed CSV records into uniform documents.

Business rows and FAQ rows have different columns, so each is wrapped in
its own metadata variant (:class:`BusinessDoc`, :class:`FaqDoc`) that
keeps the typed fields the answer formatter needs plus the full
original row.  A :class:`Document` pairs that metadata with a stable id
and the text that gets indexed.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .config import (
    BUSINESS_ID_PREFIX,
    BUSINESS_TEXT_FIELDS,
    FAQ_ID_PREFIX,
    FAQ_TEXT_FIELDS,
)

# Column name -> trimmed value, as produced by csvrag.tabular
RecordLike = Mapping[str, str]


def _field(record: RecordLike, name: str) -> str:
    # missing column and empty value are the same thing
    return record.get(name) or ""


def _join_fields(record: RecordLike, names: Sequence[str]) -> str:
    return " ".join(v for v in (_field(record, n) for n in names) if v)


def _frozen(record: RecordLike) -> Mapping[str, str]:
    return MappingProxyType(dict(record))


@dataclass(frozen=True)
class BusinessDoc:
    id: str = ""
    name: str = ""
    category: str = ""
    summary: str = ""
    offerings: str = ""
    keywords: str = ""
    city: str = ""
    state: str = ""
    record: Mapping[str, str] = field(default_factory=dict, repr=False, compare=False)
    type: str = field(default="business", init=False)

    @classmethod
    def from_record(cls, record: RecordLike) -> "BusinessDoc":
        return cls(
            id=_field(record, "id"),
            name=_field(record, "name"),
            category=_field(record, "category"),
            summary=_field(record, "summary"),
            offerings=_field(record, "offerings"),
            keywords=_field(record, "keywords"),
            city=_field(record, "city"),
            state=_field(record, "state"),
            record=_frozen(record),
        )


@dataclass(frozen=True)
class FaqDoc:
    id: str = ""
    topic: str = ""
    content: str = ""
    tags: str = ""
    record: Mapping[str, str] = field(default_factory=dict, repr=False, compare=False)
    type: str = field(default="faq", init=False)

    @classmethod
    def from_record(cls, record: RecordLike) -> "FaqDoc":
        return cls(
            id=_field(record, "id"),
            topic=_field(record, "topic"),
            content=_field(record, "content"),
            tags=_field(record, "tags"),
            record=_frozen(record),
        )


Metadata = Union[BusinessDoc, FaqDoc]


@dataclass(frozen=True)
class Document:
    """
    One retrievable unit.

    ``metadata`` is ``None`` only for documents a caller builds by hand;
    everything coming out of :func:`build_documents` is typed.
    """

    id: str
    text: str
    metadata: Optional[Metadata] = None


def business_document(record: RecordLike) -> Document:
    meta = BusinessDoc.from_record(record)
    return Document(
        id=f"{BUSINESS_ID_PREFIX}{meta.id or meta.name}",
        text=_join_fields(record, BUSINESS_TEXT_FIELDS),
        metadata=meta,
    )


def faq_document(record: RecordLike) -> Document:
    meta = FaqDoc.from_record(record)
    return Document(
        id=f"{FAQ_ID_PREFIX}{meta.id or meta.topic}",
        text=_join_fields(record, FAQ_TEXT_FIELDS),
        metadata=meta,
    )


def build_documents(
    business_records: Iterable[RecordLike],
    faq_records: Iterable[RecordLike],
) -> List[Document]:
    """
    Build the unified corpus: business documents first, then FAQ
    documents, each in input order.  Duplicate ids are kept as-is.
    """
    docs: List[Document] = [business_document(r) for r in business_records]
    docs.extend(faq_document(r) for r in faq_records)
    return docs
