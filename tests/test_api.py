"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from api.index import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def seo_term_records() -> list[dict]:
    return [
        {"text": "seo", "category": "basic", "importance": 90},
        {"text": "optimization", "category": "extended", "importance": 70},
    ]


class TestHealth:
    """Tests for the health and info endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "1.0.0"}

    def test_info(self, client):
        data = client.get("/api/info").json()
        assert "POST /api/inject" in data["endpoints"]


class TestAnalyze:
    """Tests for POST /api/analyze."""

    def test_analyze(self, client, seo_term_records):
        response = client.post("/api/analyze", json={
            "content": "<p>Our seo notes.</p>",
            "terms": seo_term_records,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["raw_score"] == 50
        assert data["weighted_score"] == 56
        assert data["missing_terms"] == ["optimization"]

    def test_analyze_payload_terms(self, client, sample_terms_payload):
        response = client.post("/api/analyze", json={
            "content": "<p>Start with keyword research.</p>",
            "terms_payload": sample_terms_payload,
        })

        assert response.status_code == 200
        assert response.json()["used_terms"][0]["term"] == "keyword research"

    def test_missing_content(self, client, seo_term_records):
        response = client.post("/api/analyze", json={"terms": seo_term_records})

        assert response.status_code == 400
        assert "content or source_url" in response.json()["detail"]


class TestInject:
    """Tests for POST /api/inject."""

    def test_inject(self, client, sample_content, seo_term_records):
        response = client.post("/api/inject", json={
            "content": sample_content,
            "terms": seo_term_records,
            "seed": 1,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["added_terms"] == ["seo", "optimization"]
        assert data["initial_coverage"] == 0
        assert data["final_coverage"] == 100
        assert data["report"]["terms"]["by_placement"] == {"paragraph": 2}
        assert "<strong>seo</strong>" in data["final_content"]

    def test_inject_options(self, client, sample_content, seo_term_records):
        response = client.post("/api/inject", json={
            "content": sample_content,
            "terms": seo_term_records,
            "max_insertions": 1,
            "seed": 1,
        })

        assert response.json()["added_terms"] == ["seo"]

    def test_invalid_target(self, client, sample_content, seo_term_records):
        response = client.post("/api/inject", json={
            "content": sample_content,
            "terms": seo_term_records,
            "target_coverage": 150,
        })

        assert response.status_code == 422


class TestEnrichment:
    """Tests for the callout and FAQ endpoints."""

    def test_callout(self, client, seo_term_records):
        response = client.post("/api/callout", json={
            "topic": "technical SEO",
            "style": "expert",
            "terms": seo_term_records,
        })

        assert response.status_code == 200
        assert "term-callout-expert" in response.json()["html"]

    def test_callout_bad_style(self, client, seo_term_records):
        response = client.post("/api/callout", json={
            "topic": "SEO",
            "style": "loud",
            "terms": seo_term_records,
        })

        assert response.status_code == 400

    def test_faqs(self, client, seo_term_records):
        response = client.post("/api/faqs", json={
            "topic": "SEO",
            "terms": seo_term_records,
            "existing_faqs": [{"question": "What is seo?", "answer": "Search engine work."}],
            "target_count": 5,
        })

        faqs = response.json()["faqs"]
        assert len(faqs) == 2
        assert "optimization" in faqs[1]["question"]
