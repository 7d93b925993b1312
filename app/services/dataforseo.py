import os
import base64
import requests
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.core.config import (
    DATAFORSEO_API_BASE,
    DATAFORSEO_LANGUAGE_CODE,
    DATAFORSEO_LOCATION_CODE,
    DATAFORSEO_TIMEOUT,
)
from app.schemas.topical_map import KeywordRecord

# Configure logging
logger = logging.getLogger(__name__)

RELATED_KEYWORDS_ENDPOINT = "/dataforseo_labs/google/related_keywords/live"
KEYWORD_SUGGESTIONS_ENDPOINT = "/dataforseo_labs/google/keyword_suggestions/live"

# Suggestions carry no connection strength of their own
SUGGESTION_CONNECTION_STRENGTH = 0.5

USER_FACING_ERROR = "Unable to fetch keywords. Please try again."


class DataForSeoError(RuntimeError):
    """Keyword data could not be fetched or read. The message is safe to show to users."""


def _auth_header() -> dict:
    login = os.getenv("DATAFORSEO_LOGIN")
    password = os.getenv("DATAFORSEO_PASSWORD")
    if not login or not password:
        raise ValueError("Missing DataForSEO credentials: DATAFORSEO_LOGIN/DATAFORSEO_PASSWORD")
    token = base64.b64encode(f"{login}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}", "Content-Type": "application/json"}


def _post(endpoint: str, payload: List[Dict[str, Any]]) -> Dict[str, Any]:
    """POST a task to DataForSEO and return the decoded JSON body."""
    headers = _auth_header()
    url = f"{DATAFORSEO_API_BASE}{endpoint}"

    try:
        resp = requests.post(url, json=payload, headers=headers, timeout=DATAFORSEO_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        body = e.response.text[:500] if e.response is not None else ""
        logger.error(f"DataForSEO HTTP error on {endpoint}: {status} - {body}")
        raise DataForSeoError(f"{USER_FACING_ERROR} (HTTP {status})") from e
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.error(f"DataForSEO request to {endpoint} failed: {e}", exc_info=True)
        raise DataForSeoError(USER_FACING_ERROR) from e


def _labs_payload(keyword: str, limit: int) -> List[Dict[str, Any]]:
    return [{
        "keyword": keyword,
        "location_code": DATAFORSEO_LOCATION_CODE,
        "language_code": DATAFORSEO_LANGUAGE_CODE,
        "limit": limit,
        # Skip keywords nobody searches for
        "filters": [["keyword_data.keyword_info.search_volume", ">", 0]],
    }]


def _iter_items(response: Dict[str, Any]):
    for task in (response or {}).get("tasks") or []:
        for result in task.get("result") or []:
            for item in result.get("items") or []:
                yield item


def _to_record(raw: Dict[str, Any]) -> Optional[KeywordRecord]:
    try:
        return KeywordRecord(**raw)
    except ValidationError as e:
        logger.warning(f"Skipping malformed DataForSEO keyword {raw.get('keyword')!r}: {e.error_count()} errors")
        return None


def parse_related_keywords_response(response: Dict[str, Any]) -> List[KeywordRecord]:
    """Read keyword records out of a related_keywords response.

    Each item nests its keyword under keyword_data; connection_strength sits on the
    item itself and is treated as 0 when absent.
    """
    keywords: List[KeywordRecord] = []

    for item in _iter_items(response):
        keyword_data = item.get("keyword_data") or {}
        keyword_info = keyword_data.get("keyword_info") or {}

        if not keyword_data.get("keyword"):
            continue

        record = _to_record({
            "keyword": keyword_data["keyword"],
            "search_volume": keyword_info.get("search_volume"),
            "difficulty": keyword_info.get("keyword_difficulty"),
            "connection_strength": item.get("connection_strength") or 0.0,
        })
        if record is not None:
            keywords.append(record)

    return keywords


def parse_keyword_suggestions_response(response: Dict[str, Any]) -> List[KeywordRecord]:
    """Read keyword records out of a keyword_suggestions response.

    Items either nest their data under keyword_data or carry it at the top level.
    """
    keywords: List[KeywordRecord] = []

    for item in _iter_items(response):
        keyword_data = item.get("keyword_data") or item
        keyword_info = keyword_data.get("keyword_info") or {}

        keyword = keyword_data.get("keyword") or item.get("keyword")
        if not keyword:
            continue

        strength = item.get("connection_strength")
        record = _to_record({
            "keyword": keyword,
            "search_volume": keyword_info.get("search_volume"),
            "difficulty": keyword_info.get("keyword_difficulty"),
            "connection_strength": SUGGESTION_CONNECTION_STRENGTH if strength is None else strength,
        })
        if record is not None:
            keywords.append(record)

    return keywords


def get_related_keywords(keyword: str, limit: int = 100) -> List[KeywordRecord]:
    """Fetch semantically related keywords for a seed (broad semantic match)."""
    response = _post(RELATED_KEYWORDS_ENDPOINT, _labs_payload(keyword, limit))
    keywords = parse_related_keywords_response(response)
    logger.info(f"DataForSEO related_keywords returned {len(keywords)} keywords for '{keyword}'")
    return keywords


def get_keyword_suggestions(keyword: str, limit: int = 50) -> List[KeywordRecord]:
    """Fetch long-tail variations of a keyword."""
    response = _post(KEYWORD_SUGGESTIONS_ENDPOINT, _labs_payload(keyword, limit))
    keywords = parse_keyword_suggestions_response(response)
    logger.info(f"DataForSEO keyword_suggestions returned {len(keywords)} keywords for '{keyword}'")
    return keywords
