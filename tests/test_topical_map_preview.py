import importlib.util
from pathlib import Path
from unittest.mock import patch

import pytest

from app.services.dataforseo import DataForSeoError
from app.services.keyword_clustering import cluster

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "topical_map_preview.py"


@pytest.fixture
def preview():
    spec = importlib.util.spec_from_file_location("topical_map_preview", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_clusters_and_orphans(preview, make_keyword, capsys):
    keywords = [make_keyword("ai seo", 1000, 20, 0.9)]
    keywords += [make_keyword(f"ai seo tip {i}", 10 * i, 40, 0.8) for i in range(1, 6)]
    keywords.append(make_keyword("weather today", 2000, 10, 0.1))

    with patch.object(preview, "generate_topical_map", return_value=cluster(keywords)) as generate:
        exit_code = preview.main(["ai seo", "--suggestions"])

    out = capsys.readouterr().out
    generate.assert_called_once_with("ai seo", include_suggestions=True)
    assert exit_code == 0
    assert "Clusters: 1" in out
    assert "1. ai seo (vol: 1,000, diff: 20 - Easy, children: 5)" in out
    assert "ai seo tip 5 (vol: 50, diff: 40 - Doable)" in out
    assert "... and 2 more" in out
    assert "• weather today (vol: 2,000)" in out


def test_reports_provider_errors(preview, capsys):
    with patch.object(preview, "generate_topical_map", side_effect=DataForSeoError("Unable to fetch keywords. Please try again.")):
        exit_code = preview.main(["ai seo"])

    assert exit_code == 1
    assert "Unable to fetch keywords" in capsys.readouterr().out


def test_requires_a_keyword(preview, capsys):
    assert preview.main([]) == 1
    assert "Usage" in capsys.readouterr().out
