import pytest

from csvrag.corpus import build_documents
from csvrag.index import build_index

BUSINESS_CSV = (
    "id,name,category,summary,offerings,keywords,city,state\n"
    "1,Acme Law,Family Law,Divorce and custody,,custody divorce,Austin,TX\n"
)

FAQ_CSV = (
    "id,topic,content,tags\n"
    "1,Fees,We charge flat fees for consultations,fees pricing\n"
)


@pytest.fixture
def business_records():
    return [
        {
            "id": "1",
            "name": "Acme Law",
            "category": "Family Law",
            "summary": "Divorce and custody",
            "offerings": "",
            "keywords": "custody divorce",
            "city": "Austin",
            "state": "TX",
        }
    ]


@pytest.fixture
def faq_records():
    return [
        {
            "id": "1",
            "topic": "Fees",
            "content": "We charge flat fees for consultations",
            "tags": "fees pricing",
        }
    ]


@pytest.fixture
def documents(business_records, faq_records):
    return build_documents(business_records, faq_records)


@pytest.fixture
def index(documents):
    return build_index(documents)


@pytest.fixture
def source_files(tmp_path):
    biz = tmp_path / "business.csv"
    faq = tmp_path / "faq_kb.csv"
    biz.write_text(BUSINESS_CSV, encoding="utf-8")
    faq.write_text(FAQ_CSV, encoding="utf-8")
    return biz, faq
