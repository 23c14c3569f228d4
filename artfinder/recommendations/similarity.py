from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import TypeVar

from .config import DEFAULT_RECOMMENDER_CONFIG, RecommenderConfig
from .models import CandidateArtwork, ReferenceArtwork

T = TypeVar("T", bound=Hashable)


def jaccard(a: Iterable[T] | None, b: Iterable[T] | None) -> float:
    """Intersection over union of two collections; 0.0 if either is empty."""
    set_a = set(a or ())
    set_b = set(b or ())
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def split_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def exact_match(a: str | None, b: str | None) -> float:
    # Two missing values are not a match.
    if a is None or b is None:
        return 0.0
    return 1.0 if a == b else 0.0


def temporal_proximity(year_a: int | None, year_b: int | None, span: int = 100) -> float:
    if year_a is None or year_b is None:
        return 0.0
    return max(0.0, 1.0 - abs(year_a - year_b) / span)


def score_breakdown(
    reference: ReferenceArtwork,
    candidate: CandidateArtwork,
    artist_id: int,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> dict[str, float]:
    """Return the unweighted value of every similarity metric for one candidate."""
    return {
        "same_artist": 1.0 if candidate.artist.content_id == artist_id else 0.0,
        "style": exact_match(reference.style, candidate.style),
        "genre": exact_match(reference.genre, candidate.genre),
        "period": exact_match(reference.period, candidate.period),
        "technique": exact_match(reference.technique, candidate.technique),
        "tags": jaccard(split_tags(reference.tags), split_tags(candidate.tags)),
        "dictionaries": (
            jaccard(reference.dictionaries, candidate.dictionaries)
            if reference.dictionaries is not None and candidate.dictionaries is not None
            else 0.0
        ),
        "temporal": temporal_proximity(
            reference.completition_year,
            candidate.completition_year,
            span=config.temporal_span,
        ),
    }


def weighted_score(breakdown: dict[str, float], weights: dict[str, float]) -> float:
    return sum(weights.get(metric, 0.0) * value for metric, value in breakdown.items())


def similarity_score(
    reference: ReferenceArtwork,
    candidate: CandidateArtwork,
    artist_id: int,
    diversity_factor: float = 0.0,
    config: RecommenderConfig = DEFAULT_RECOMMENDER_CONFIG,
) -> float:
    """Weighted similarity of ``candidate`` to ``reference``.

    When ``diversity_factor`` is positive, candidates by the requested artist
    are discounted by that fraction.
    """
    breakdown = score_breakdown(reference, candidate, artist_id, config)
    raw = weighted_score(breakdown, config.weights)
    if diversity_factor > 0:
        raw *= 1.0 - breakdown["same_artist"] * diversity_factor
    return raw
