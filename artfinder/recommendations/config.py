from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_PROCESSED_DIR = Path(__file__).resolve().parent.parent / "data" / "processed"

DEFAULT_WEIGHTS: dict[str, float] = {
    "same_artist": 1.5,
    "style": 2.5,
    "genre": 2.0,
    "period": 1.5,
    "technique": 1.5,
    "tags": 3.0,
    "dictionaries": 2.5,
    "temporal": 1.0,
}


@dataclass(frozen=True)
class RecommenderConfig:
    weights: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    year_window: int = 50
    temporal_span: int = 100
    thumbnail_suffix: str = "!Large.jpg"
    default_limit: int = 25
    default_diversity_factor: float = 0.3


@dataclass(frozen=True)
class DataConfig:
    processed_data_dir: Path = Path(
        os.getenv("ARTFINDER_DATA_DIR", str(_DEFAULT_PROCESSED_DIR))
    )
    artworks_filename: str = "artworks.csv"
    artists_filename: str = "artists.csv"

    @property
    def artworks_path(self) -> Path:
        return self.processed_data_dir / self.artworks_filename

    @property
    def artists_path(self) -> Path:
        return self.processed_data_dir / self.artists_filename


DEFAULT_RECOMMENDER_CONFIG = RecommenderConfig()
DEFAULT_DATA_CONFIG = DataConfig()
