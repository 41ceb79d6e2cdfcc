from csvrag.answer import ANSWER_INTRO, ANSWER_OUTRO, NO_MATCH_ANSWER, format_answer
from csvrag.corpus import BusinessDoc, Document, FaqDoc, business_document, faq_document
from csvrag.retrieval import Hit


def _hits(*docs):
    return [Hit(document=d, score=0.5, rank=i) for i, d in enumerate(docs, 1)]


def test_no_hits_gives_fixed_message():
    out = format_answer("anything", [])
    assert out.answer == NO_MATCH_ANSWER
    assert out.sources == []


def test_renders_each_variant_in_rank_order():
    faq = faq_document({"id": "1", "topic": "Fees", "content": "Flat fees", "tags": ""})
    biz = business_document({"id": "2", "name": "Acme Law", "category": "Family Law", "summary": "Custody"})
    raw = Document("x_1", "plain text row")
    out = format_answer("q", _hits(faq, biz, raw))

    assert out.answer == (
        f"{ANSWER_INTRO}\n\n"
        "1) FAQ: Fees — Flat fees\n\n"
        "2) Acme Law (Family Law) — Custody\n\n"
        "3) plain text row\n\n"
        f"{ANSWER_OUTRO}"
    )
    assert out.sources == ["FAQ: Fees", "Biz: Acme Law", "Doc: x_1"]


def test_labels_fall_back_to_entry():
    faq = Document("faq_1", "", FaqDoc(id="1"))
    biz = Document("biz_2", "", BusinessDoc(id="2"))
    out = format_answer("q", _hits(faq, biz))
    assert out.sources == ["FAQ: entry", "Biz: entry"]


def test_closing_prompt_mentions_follow_up_dimensions():
    for word in ("fees", "timeline", "practice area", "service"):
        assert word in ANSWER_OUTRO


def test_lines_and_sources_come_from_each_hit():
    faq = faq_document({"id": "1", "topic": "Fees", "content": "Flat fees"})
    biz = business_document({"id": "2", "name": "Acme Law", "category": "Family Law", "summary": "Custody"})
    hits = [Hit(document=biz, score=0.4, rank=1), Hit(document=faq, score=0.3, rank=2)]
    out = format_answer("q", hits)
    assert out.sources == [h.label for h in hits]
    assert "1) Acme Law (Family Law) — Custody" in out.answer
    assert "2) FAQ: Fees — Flat fees" in out.answer
    assert out.answer.index("1) Acme Law") < out.answer.index("2) FAQ: Fees")
