"""
Unit tests for the HTTP service (in-memory index, no network).
"""

import pytest
from fastapi.testclient import TestClient

from more_like_this.api import app, get_index
from more_like_this.index import InMemoryIndex

DOCUMENTS = [
    (1, "the quick brown fox the quick fox jumps"),
    (2, "a quick fox runs through the forest"),
    (3, "the lazy dog sleeps all day"),
]


@pytest.fixture
def index():
    return InMemoryIndex()


@pytest.fixture
def client(index):
    app.dependency_overrides[get_index] = lambda: index
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def populated(client):
    for doc_id, body in DOCUMENTS:
        response = client.post("/v1/documents", json={"id": doc_id, "fields": {"body": body}})
        assert response.status_code == 201
    return client


SIMILAR = {"field_names": ["body"], "min_term_freq": 1, "min_doc_freq": 1}


class TestDocumentsEndpoints:
    
    def test_root_and_health(self, populated):
        assert populated.get("/").json()["status"] == "running"
        
        health = populated.get("/health").json()
        assert health["status"] == "healthy"
        assert health["documents"] == 3
    
    def test_add_document(self, client, index):
        response = client.post("/v1/documents", json={"id": "a1", "fields": {"body": "fox"}, "term_vectors": True})
        
        assert response.status_code == 201
        assert response.json()["doc_id"] == "a1"
        assert index.reader().get_term_vector(0, "body") is not None
    
    def test_reserved_id_field(self, client):
        response = client.post("/v1/documents", json={"id": 1, "fields": {"id": "2"}})
        
        assert response.status_code == 400
    
    def test_get_document(self, populated):
        response = populated.get("/v1/documents/3")
        
        assert response.status_code == 200
        assert response.json()["fields"]["body"] == "the lazy dog sleeps all day"
        assert populated.get("/v1/documents/99").status_code == 404
    
    def test_delete_document(self, populated, index):
        assert populated.delete("/v1/documents/3").status_code == 200
        assert populated.delete("/v1/documents/3").status_code == 404
        assert len(index) == 2


class TestSimilarEndpoints:
    
    def test_similar(self, populated):
        response = populated.post("/v1/documents/1/similar", json=SIMILAR)
        
        assert response.status_code == 200
        data = response.json()
        ids = [item["doc_id"] for item in data["results"]]
        assert "1" not in ids
        assert ids[0] == "2"
        assert data["total"] == len(ids)
        assert data["query"].endswith("-id:1")
    
    def test_similar_returns_structured_clauses(self, populated):
        data = populated.post("/v1/documents/1/similar", json=dict(SIMILAR, max_query_terms=2)).json()
        clauses = data["clauses"]
        
        assert clauses["must_not"] == [{"field": "id", "text": "1", "boost": 1.0}]
        assert clauses["must"] == []
        assert len(clauses["should"]) == 2
        assert all(c["field"] == "body" for c in clauses["should"])
        assert data["query"] == " ".join(
            [f"body:{c['text']}" for c in clauses["should"]] + ["-id:1"]
        )
    
    def test_similar_limit(self, populated):
        response = populated.post("/v1/documents/1/similar", json=dict(SIMILAR, limit=1))
        
        assert response.json()["total"] == 1
    
    def test_similar_unknown_document(self, populated):
        response = populated.post("/v1/documents/99/similar", json=SIMILAR)
        
        assert response.status_code == 404
    
    def test_similar_requires_field_names(self, populated):
        response = populated.post("/v1/documents/1/similar", json={"field_names": []})
        
        assert response.status_code == 422
    
    def test_similar_closed_index(self, populated, index):
        index.close()
        
        response = populated.post("/v1/documents/1/similar", json=SIMILAR)
        
        assert response.status_code == 503
    
    def test_terms(self, populated):
        response = populated.post("/v1/documents/1/terms", json=dict(SIMILAR, min_term_freq=2))
        
        assert response.status_code == 200
        terms = response.json()["terms"]
        assert {t["word"] for t in terms} == {"the", "quick", "fox"}
        assert terms[-1]["word"] == "the"
        assert all(t["field"] == "body" for t in terms)
