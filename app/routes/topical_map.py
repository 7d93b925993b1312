from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.schemas.topical_map import (
    GenerateTopicalMapRequest,
    SuggestionsRequest,
    SuggestionsResponse,
    TopicalMapResponse,
)
from app.services.dataforseo import DataForSeoError, get_keyword_suggestions
from app.services.difficulty import difficulty_label
from app.services.topical_map import generate_topical_map, label_keyword, label_result, new_suggestions

router = APIRouter(prefix="/topical-map", tags=["Topical Map"])
limiter = Limiter(key_func=get_remote_address)


@router.post("/generate", response_model=TopicalMapResponse)
@limiter.limit("10/hour")  # Each call spends DataForSEO credits
def generate(request: Request, req: GenerateTopicalMapRequest):
    """
    Generate a topical map for a seed keyword.

    1. Fetches related keywords (and long-tail suggestions if requested)
    2. Merges and de-duplicates them
    3. Clusters them into parent/children groups plus orphans
    4. Returns every keyword with its difficulty label

    Storing the map is left to the caller.
    """
    try:
        result = generate_topical_map(
            req.seed_keyword,
            include_suggestions=req.include_suggestions,
            threshold=req.threshold,
        )
    except DataForSeoError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        # Missing provider credentials
        raise HTTPException(status_code=500, detail=str(e))

    return label_result(req.seed_keyword, result, included_suggestions=req.include_suggestions)


@router.post("/suggestions", response_model=SuggestionsResponse)
@limiter.limit("30/hour")
def suggestions(request: Request, req: SuggestionsRequest):
    """
    Fetch long-tail suggestions for a keyword, skipping any the caller already has.

    The caller decides whether they become new clusters or children of an existing one.
    """
    try:
        fetched = get_keyword_suggestions(req.keyword)
    except DataForSeoError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    fresh = new_suggestions(fetched, req.existing_keywords)
    return SuggestionsResponse(
        keyword=req.keyword,
        keywords_added=len(fresh),
        suggestions=[label_keyword(kw) for kw in fresh],
    )


@router.get("/difficulty/{score}")
def get_difficulty_label(score: int):
    if score < 0 or score > 100:
        raise HTTPException(status_code=400, detail="score must be between 0 and 100")
    return {"score": score, "label": difficulty_label(score).value}
