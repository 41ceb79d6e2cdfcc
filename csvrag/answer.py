from __future__ import annotations

"""
Turn ranked hits into the assistant's reply.

There is no generation step: the reply is a fixed template around one
line per hit, and ``sources`` carries one citation label per line in
the same order.
"""

from typing import List, Sequence

from pydantic import BaseModel, Field

from .corpus import BusinessDoc, Document, FaqDoc
from .retrieval import Hit

NO_MATCH_ANSWER = (
    "I didn’t find a strong match in the CSV knowledge base.\n\n"
    "Try:\n"
    "• using more specific keywords (e.g., “consultation”, “fees”, “custody”, “real estate”)\n"
    "• adding more rows to data/faq_kb.csv or data/business.csv"
)

ANSWER_INTRO = "Here’s what I found in the knowledge base:"

ANSWER_OUTRO = (
    "If you want, tell me which part you want to act on "
    "(fees, timeline, practice area, or a specific service)."
)

# Canned reply for when retrieval is switched off or not loaded yet
DEFAULT_REPLY = (
    "I can help with:\n"
    "• Practice areas and consultation steps\n"
    "• Typical timelines and process\n"
    "• Fee structure overview (varies by matter)\n\n"
    "Tip: enable “Use RAG retrieval” to search your CSV knowledge base."
)


class Answer(BaseModel):
    answer: str
    sources: List[str] = Field(default_factory=list)


def render_hit_line(rank: int, document: Document) -> str:
    meta = document.metadata
    if isinstance(meta, FaqDoc):
        return f"{rank}) FAQ: {meta.topic} — {meta.content}"
    if isinstance(meta, BusinessDoc):
        return f"{rank}) {meta.name} ({meta.category}) — {meta.summary}"
    return f"{rank}) {document.text}"


def format_answer(query: str, hits: Sequence[Hit]) -> Answer:
    """Render ``hits`` (already ranked) as an :class:`Answer`."""
    if not hits:
        return Answer(answer=NO_MATCH_ANSWER, sources=[])

    lines = [render_hit_line(hit.rank, hit.document) for hit in hits]
    body = "\n\n".join(lines)
    return Answer(
        answer=f"{ANSWER_INTRO}\n\n{body}\n\n{ANSWER_OUTRO}",
        sources=[hit.label for hit in hits],
    )
