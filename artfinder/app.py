from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query

from .categories.models import Category, CategoryType
from .categories.related import (
    ArtworkNotFound,
    category_cache,
    get_related_categories,
    list_categories,
)
from .recommendations.data_store import get_store
from .recommendations.models import RecommendationResponse
from .recommendations.recommender import RecommendationUnavailable, SimilarityRecommender

app = FastAPI(title="Artfinder API", version="1.0.0")

recommender = SimilarityRecommender()


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/artists/{artist_id}/recommendations", response_model=RecommendationResponse)
def artist_recommendations(
    artist_id: int,
    limit: int = Query(default=25, ge=0, le=100),
    include_time_range: bool = True,
    diversity_factor: float = Query(default=0.3, ge=0.0, lt=1.0),
) -> RecommendationResponse:
    # The widget renders an empty state either way; ``available`` tells
    # callers whether the list is empty because the lookup failed.
    try:
        items = recommender.recommend_or_raise(
            artist_id,
            limit=limit,
            include_time_range=include_time_range,
            diversity_factor=diversity_factor,
        )
    except RecommendationUnavailable:
        return RecommendationResponse(artist_id=artist_id, recommendations=[], available=False)
    return RecommendationResponse(artist_id=artist_id, recommendations=items)


@app.get("/artworks/{artwork_id}/related-categories", response_model=list[Category])
def related_categories(
    artwork_id: int,
    limit: int = Query(default=5, ge=1, le=20),
) -> list[Category]:
    try:
        return get_related_categories(get_store(), artwork_id, limit=limit)
    except ArtworkNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@app.get("/categories/{kind}", response_model=list[Category])
def categories(
    kind: CategoryType,
    limit: int = Query(default=100, ge=1, le=500),
) -> list[Category]:
    return list_categories(get_store(), kind, limit=limit)


# ── Operational endpoints ────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return category_cache.stats()
