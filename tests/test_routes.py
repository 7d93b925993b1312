from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routes import topical_map as topical_map_routes
from app.services.dataforseo import DataForSeoError


@pytest.fixture
def client():
    topical_map_routes.limiter.enabled = False
    yield TestClient(app)
    topical_map_routes.limiter.enabled = True


def test_health_check(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_generate_returns_labeled_map(client, make_keyword):
    related = [
        make_keyword("ai seo", 1000, 20, 0.9),
        make_keyword("ai seo tools", 500, 30, 0.8),
        make_keyword("weather today", 2000, 10, 0.1),
    ]

    with patch("app.services.topical_map.get_related_keywords", return_value=related):
        resp = client.post("/topical-map/generate", json={"seed_keyword": "ai seo"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["seed"] == "ai seo"
    assert body["cluster_count"] == 1
    assert body["total_keywords"] == 3
    assert body["included_suggestions"] is False
    assert body["clusters"][0]["parent"]["keyword"] == "ai seo"
    assert body["clusters"][0]["children"][0]["difficulty_label"] == "Doable"
    assert body["orphans"][0]["keyword"] == "weather today"


def test_generate_rejects_empty_seed(client):
    resp = client.post("/topical-map/generate", json={"seed_keyword": ""})

    assert resp.status_code == 422


def test_generate_provider_failure_is_bad_gateway(client):
    error = DataForSeoError("Unable to fetch keywords. Please try again.")

    with patch("app.services.topical_map.get_related_keywords", side_effect=error):
        resp = client.post("/topical-map/generate", json={"seed_keyword": "ai seo"})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Unable to fetch keywords. Please try again."


def test_suggestions_skip_existing_keywords(client, make_keyword):
    fetched = [make_keyword("AI SEO", 1000, 20), make_keyword("ai seo course", 40, 65)]

    with patch.object(topical_map_routes, "get_keyword_suggestions", return_value=fetched):
        resp = client.post(
            "/topical-map/suggestions",
            json={"keyword": "ai seo", "existing_keywords": ["ai seo"]},
        )

    assert resp.status_code == 200
    body = resp.json()
    assert body["keywords_added"] == 1
    assert body["suggestions"][0]["keyword"] == "ai seo course"
    assert body["suggestions"][0]["difficulty_label"] == "Hard"


@pytest.mark.parametrize("score, label", [(29, "Easy"), (30, "Doable"), (60, "Hard")])
def test_difficulty_endpoint(client, score, label):
    resp = client.get(f"/topical-map/difficulty/{score}")

    assert resp.status_code == 200
    assert resp.json() == {"score": score, "label": label}


def test_difficulty_endpoint_rejects_out_of_range(client):
    assert client.get("/topical-map/difficulty/101").status_code == 400
