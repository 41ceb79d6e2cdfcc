from fastapi.testclient import TestClient

from csvrag.answer import DEFAULT_REPLY
from csvrag.api import create_app
from csvrag.config import EngineConfig


def _client(biz, faq):
    config = EngineConfig(business_source_path=str(biz), faq_source_path=str(faq))
    return TestClient(create_app(config))


def test_health_and_query(source_files):
    with _client(*source_files) as client:
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "documents": 2}

        r = client.post("/query", json={"query": "custody fees", "k": 2})
        assert r.status_code == 200
        body = r.json()
        assert set(body["sources"]) == {"Biz: Acme Law", "FAQ: Fees"}


def test_blank_query_is_rejected(source_files):
    with _client(*source_files) as client:
        assert client.post("/query", json={"query": "   "}).status_code == 422
        assert client.post("/query", json={"query": "fees", "k": 0}).status_code == 422


def test_degraded_mode_serves_default_reply(tmp_path):
    with _client(tmp_path / "a.csv", tmp_path / "b.csv") as client:
        assert client.get("/health").json() == {"status": "degraded", "documents": 0}
        r = client.post("/query", json={"query": "custody"})
        assert r.status_code == 200
        assert r.json() == {"answer": DEFAULT_REPLY, "sources": []}
        assert client.post("/reload").status_code == 503


def test_reload_picks_up_new_rows(source_files):
    biz, faq = source_files
    with _client(biz, faq) as client:
        faq.write_text(
            "id,topic,content,tags\n"
            "1,Fees,We charge flat fees for consultations,fees pricing\n"
            "2,Parking,Free parking behind the office,parking\n",
            encoding="utf-8",
        )
        r = client.post("/reload")
        assert r.status_code == 200
        assert r.json()["documents"] == 3
        r = client.post("/query", json={"query": "parking"})
        assert r.json()["sources"] == ["FAQ: Parking"]


def test_retrieval_toggle_off_serves_default_reply(source_files):
    with _client(*source_files) as client:
        r = client.post("/query", json={"query": "custody fees", "use_rag": False})
        assert r.status_code == 200
        assert r.json() == {"answer": DEFAULT_REPLY, "sources": []}


def test_query_without_k_uses_default(source_files):
    with _client(*source_files) as client:
        r = client.post("/query", json={"query": "custody fees"})
        assert r.status_code == 200
        assert len(r.json()["sources"]) == 2
