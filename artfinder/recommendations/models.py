from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ArtistRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_id: int | None = None
    artist_name: str | None = None


class ReferenceArtwork(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_id: int
    completition_year: int | None = None
    tags: str | None = Field(default=None, description="Comma-separated free-text labels")
    dictionaries: list[int] | None = Field(
        default=None, description="Catalog category-tag identifiers"
    )
    style: str | None = None
    genre: str | None = None
    period: str | None = None
    technique: str | None = None


class CandidateArtwork(ReferenceArtwork):
    title: str = ""
    image: str = ""
    year_as_string: str | None = None
    artist: ArtistRef = Field(default_factory=ArtistRef)


class ScoredCandidate(CandidateArtwork):
    score: float = Field(..., ge=0.0)


class RecommendationResponse(BaseModel):
    artist_id: int
    recommendations: list[ScoredCandidate]
    available: bool = True
