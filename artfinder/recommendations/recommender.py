from __future__ import annotations

import logging
import math
import time

from ..analytics.store import record_event
from .config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .data_store import ArtworkStore, get_store
from .models import CandidateArtwork, ReferenceArtwork, ScoredCandidate
from .similarity import similarity_score

logger = logging.getLogger(__name__)


class RecommendationUnavailable(Exception):
    """Recommendations could not be computed (storage or data failure)."""


def diversity_cap(limit: int, diversity_factor: float) -> int:
    """Maximum number of results any single artist may contribute."""
    return max(1, math.ceil(limit * (1.0 - diversity_factor)))


def normalize_image(url: str, suffix: str) -> str:
    """Strip the catalog's thumbnail-size marker from an image URL."""
    return url.replace(suffix, "") if url and suffix else url


def rank_candidates(
    reference: ReferenceArtwork,
    pool: list[CandidateArtwork],
    artist_id: int,
    diversity_factor: float,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> list[ScoredCandidate]:
    """Score every candidate and sort by descending score, then ascending id.

    Scores are rounded before sorting so equal displayed scores stay in id order.
    """
    scored = [
        ScoredCandidate(
            **candidate.model_dump(),
            score=round(
                similarity_score(reference, candidate, artist_id, diversity_factor, config), 4
            ),
        )
        for candidate in pool
        if candidate.content_id != reference.content_id
    ]
    scored.sort(key=lambda c: (-c.score, c.content_id))
    return scored


def apply_diversity_cap(
    ranked: list[ScoredCandidate],
    limit: int,
    diversity_factor: float,
) -> list[ScoredCandidate]:
    cap = diversity_cap(limit, diversity_factor)
    per_artist: dict[int, int] = {}
    selected: list[ScoredCandidate] = []
    for candidate in ranked:
        if len(selected) >= limit:
            break
        aid = candidate.artist.content_id
        if aid is None:
            continue
        if per_artist.get(aid, 0) >= cap:
            continue
        per_artist[aid] = per_artist.get(aid, 0) + 1
        selected.append(candidate)
    return selected


class SimilarityRecommender:
    """Recommends artworks similar to a reference artwork by a given artist.

    The store is resolved lazily so that a store that fails to load is
    reported like any other storage failure.
    """

    def __init__(
        self,
        store: ArtworkStore | None = None,
        config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
    ) -> None:
        self._store = store
        self.config = config

    @property
    def store(self) -> ArtworkStore:
        return self._store if self._store is not None else get_store()

    def recommend_or_raise(
        self,
        artist_id: int,
        limit: int | None = None,
        include_time_range: bool = True,
        diversity_factor: float | None = None,
    ) -> list[ScoredCandidate]:
        """Like :meth:`recommend`, but raise :class:`RecommendationUnavailable`
        instead of returning an empty list when storage fails."""
        if limit is None:
            limit = self.config.default_limit
        if diversity_factor is None:
            diversity_factor = self.config.default_diversity_factor
        if not 0.0 <= diversity_factor < 1.0:
            raise ValueError(f"diversity_factor must be in [0, 1), got {diversity_factor}")
        if limit <= 0:
            return []

        start_time = time.time()
        try:
            store = self.store
            reference = store.fetch_one_artwork_by_artist(artist_id)
            if reference is None:
                return []

            year_range = None
            if include_time_range and reference.completition_year is not None:
                window = self.config.year_window
                year = reference.completition_year
                year_range = (year - window, year + window)

            pool = store.fetch_candidate_pool(reference.content_id, year_range)
            ranked = rank_candidates(reference, pool, artist_id, diversity_factor, self.config)
        except Exception as exc:
            logger.warning("Recommendations unavailable for artist %s", artist_id, exc_info=True)
            record_event("recommendation_failed", {
                "artist_id": artist_id,
                "error": type(exc).__name__,
            })
            raise RecommendationUnavailable(
                f"Could not compute recommendations for artist {artist_id}"
            ) from exc

        selected = apply_diversity_cap(ranked, limit, diversity_factor)
        results = [
            c.model_copy(update={"image": normalize_image(c.image, self.config.thumbnail_suffix)})
            for c in selected[:limit]
        ]

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("recommendation", {
            "artist_id": artist_id,
            "reference_id": reference.content_id,
            "pool_size": len(pool),
            "results_returned": len(results),
            "time_windowed": year_range is not None,
            "response_time_ms": elapsed_ms,
        })
        return results

    def recommend(
        self,
        artist_id: int,
        limit: int | None = None,
        include_time_range: bool = True,
        diversity_factor: float | None = None,
    ) -> list[ScoredCandidate]:
        """Return up to ``limit`` artworks similar to the artist's reference work.

        Never raises on storage failure; an empty list is returned instead and
        the failure is logged and recorded as a ``recommendation_failed`` event.
        """
        try:
            return self.recommend_or_raise(artist_id, limit, include_time_range, diversity_factor)
        except RecommendationUnavailable:
            return []


_default_recommender = SimilarityRecommender()


def get_recommendations(
    artist_id: int,
    limit: int = 25,
    include_time_range: bool = True,
    diversity_factor: float = 0.3,
) -> list[ScoredCandidate]:
    return _default_recommender.recommend(artist_id, limit, include_time_range, diversity_factor)
