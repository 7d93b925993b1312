import pytest

from app.schemas.topical_map import KeywordRecord


@pytest.fixture(autouse=True)
def dataforseo_credentials(monkeypatch):
    monkeypatch.setenv("DATAFORSEO_LOGIN", "tester@example.com")
    monkeypatch.setenv("DATAFORSEO_PASSWORD", "secret")


@pytest.fixture
def make_keyword():
    def _make(keyword, volume=0, difficulty=0, strength=0.5):
        return KeywordRecord(
            keyword=keyword,
            search_volume=volume,
            difficulty=difficulty,
            connection_strength=strength,
        )
    return _make
