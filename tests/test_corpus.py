from csvrag.corpus import (
    BusinessDoc,
    Document,
    FaqDoc,
    build_documents,
    business_document,
    faq_document,
)


def test_business_text_uses_fixed_field_order(business_records):
    doc = business_document(business_records[0])
    assert doc.id == "biz_1"
    assert doc.text == "Acme Law Family Law Divorce and custody custody divorce Austin TX"
    assert isinstance(doc.metadata, BusinessDoc)
    assert doc.metadata.type == "business"
    assert doc.metadata.name == "Acme Law"


def test_faq_text_uses_fixed_field_order(faq_records):
    doc = faq_document(faq_records[0])
    assert doc.id == "faq_1"
    assert doc.text == "Fees We charge flat fees for consultations fees pricing"
    assert isinstance(doc.metadata, FaqDoc)
    assert doc.metadata.type == "faq"


def test_id_falls_back_to_name_or_topic():
    assert business_document({"name": "Vega Legal"}).id == "biz_Vega Legal"
    assert faq_document({"id": "", "topic": "Fees"}).id == "faq_Fees"


def test_missing_columns_behave_like_empty_values():
    doc = business_document({"name": "Solo", "state": "TX"})
    assert doc.text == "Solo TX"
    assert doc.metadata.category == ""


def test_metadata_keeps_full_record():
    doc = faq_document({"id": "7", "topic": "Parking", "content": "Free", "owner": "ops"})
    assert doc.metadata.record["owner"] == "ops"
    assert "owner" not in doc.text


def test_build_documents_orders_business_then_faq(business_records, faq_records):
    docs = build_documents(business_records, faq_records)
    assert [d.id for d in docs] == ["biz_1", "faq_1"]
    assert all(isinstance(d, Document) for d in docs)


def test_duplicate_ids_are_kept():
    docs = build_documents([{"id": "1", "name": "A"}, {"id": "1", "name": "B"}], [])
    assert [d.id for d in docs] == ["biz_1", "biz_1"]
