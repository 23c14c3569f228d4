from __future__ import annotations

import itertools
import json
import logging
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from .config import DEFAULT_DATA_CONFIG, DataConfig
from .models import ArtistRef, CandidateArtwork, ReferenceArtwork
from .similarity import split_tags

logger = logging.getLogger(__name__)

ARTWORK_COLUMNS: list[str] = [
    "content_id",
    "artist_content_id",
    "artist_name",
    "title",
    "url",
    "completition_year",
    "year_as_string",
    "style",
    "genre",
    "period",
    "technique",
    "tags",
    "dictionaries",
    "image",
]
ARTIST_COLUMNS: list[str] = ["content_id", "artist_name", "url"]
CATEGORY_COLUMNS = ("style", "genre", "period", "technique")
_TEXT_COLUMNS = (
    "artist_name", "title", "url", "year_as_string", "style", "genre",
    "period", "technique", "tags", "dictionaries", "image",
)

_store_versions = itertools.count(1)


def _clean(value: Any) -> Any:
    if isinstance(value, (list, tuple, np.ndarray)):
        return value
    if value is None or pd.isna(value):
        return None
    return value


def _to_int(value: Any) -> int | None:
    value = _clean(value)
    return None if value is None else int(value)


def _text(value: Any) -> str | None:
    value = _clean(value)
    return None if value is None else str(value)


def _parse_dictionaries(raw: Any) -> list[int] | None:
    """Dictionaries are stored as a JSON array string in the processed CSV."""
    raw = _clean(raw)
    if raw is None:
        return None
    if isinstance(raw, (list, tuple, np.ndarray)):
        return [int(x) for x in raw]
    text = str(raw).strip()
    if not text:
        return None
    parsed = json.loads(text)
    if parsed is None:
        return None
    return [int(x) for x in parsed]


def _prepare_artworks(df: pd.DataFrame) -> pd.DataFrame:
    df = df.reindex(columns=ARTWORK_COLUMNS).dropna(subset=["content_id"]).copy()
    df["content_id"] = df["content_id"].astype(int)
    df["artist_content_id"] = pd.to_numeric(df["artist_content_id"], errors="coerce")
    df["completition_year"] = pd.to_numeric(df["completition_year"], errors="coerce")
    df["dictionaries"] = df["dictionaries"].apply(_parse_dictionaries).astype(object)

    # Storage order is ascending content id; "first artwork by artist" relies on it.
    return df.sort_values("content_id", kind="mergesort").reset_index(drop=True)


def _prepare_artists(df: pd.DataFrame) -> pd.DataFrame:
    df = df.reindex(columns=ARTIST_COLUMNS).dropna(subset=["content_id"]).copy()
    df["content_id"] = df["content_id"].astype(int)
    return df.drop_duplicates("content_id", keep="last").reset_index(drop=True)


def _row_to_reference(row: pd.Series) -> ReferenceArtwork:
    return ReferenceArtwork(
        content_id=int(row["content_id"]),
        completition_year=_to_int(row["completition_year"]),
        tags=_text(row["tags"]),
        dictionaries=_parse_dictionaries(row["dictionaries"]),
        style=_text(row["style"]),
        genre=_text(row["genre"]),
        period=_text(row["period"]),
        technique=_text(row["technique"]),
    )


def _row_to_candidate(row: pd.Series) -> CandidateArtwork:
    reference = _row_to_reference(row)
    return CandidateArtwork(
        **reference.model_dump(),
        title=_text(row["title"]) or "",
        image=_text(row["image"]) or "",
        year_as_string=_text(row["year_as_string"]),
        artist=ArtistRef(
            content_id=_to_int(row["_artist_id"]),
            artist_name=_text(row["_artist_name"]),
        ),
    )


class ArtworkStore:
    """Read-only artwork/artist storage backed by pandas DataFrames."""

    def __init__(self, artworks: pd.DataFrame, artists: pd.DataFrame) -> None:
        self._artworks = _prepare_artworks(artworks)
        self._artists = _prepare_artists(artists)
        # Unique per instance; keys cached results to the data they came from.
        self.version = next(_store_versions)

    @classmethod
    def from_records(
        cls,
        artworks: list[dict[str, Any]],
        artists: list[dict[str, Any]],
    ) -> ArtworkStore:
        return cls(pd.DataFrame(artworks), pd.DataFrame(artists))

    def __len__(self) -> int:
        return len(self._artworks)

    @property
    def artist_count(self) -> int:
        return len(self._artists)

    def fetch_one_artwork_by_artist(self, artist_id: int) -> ReferenceArtwork | None:
        rows = self._artworks.loc[self._artworks["artist_content_id"] == artist_id]
        if rows.empty:
            return None
        return _row_to_reference(rows.iloc[0])

    def fetch_artwork(self, content_id: int) -> ReferenceArtwork | None:
        rows = self._artworks.loc[self._artworks["content_id"] == content_id]
        if rows.empty:
            return None
        return _row_to_reference(rows.iloc[0])

    def fetch_candidate_pool(
        self,
        exclude_id: int,
        year_range: tuple[int, int] | None = None,
    ) -> list[CandidateArtwork]:
        """Every artwork except ``exclude_id``, optionally limited to an
        inclusive ``(min_year, max_year)`` range. Artworks without a known
        year never fall inside a range."""
        df = self._artworks
        mask = df["content_id"] != exclude_id
        if year_range is not None:
            low, high = year_range
            mask = mask & df["completition_year"].between(low, high, inclusive="both")

        artists = self._artists.rename(
            columns={"content_id": "_artist_id", "artist_name": "_artist_name"}
        )[["_artist_id", "_artist_name"]]
        pool = df.loc[mask].merge(
            artists, how="left", left_on="artist_content_id", right_on="_artist_id"
        )
        return [_row_to_candidate(row) for _, row in pool.iterrows()]

    def count_by(self, column: str, value: str) -> int:
        if column not in CATEGORY_COLUMNS:
            raise ValueError(f"Unknown category column: {column}")
        return int((self._artworks[column] == value).sum())

    def count_tag(self, tag: str) -> int:
        return int(self._artworks["tags"].apply(lambda t: tag in split_tags(_text(t))).sum())

    def category_values(self, kind: str) -> list[tuple[str, int]]:
        """Distinct values of one category with artwork counts, most common first."""
        if kind == "tag":
            values = self._artworks["tags"].apply(lambda t: split_tags(_text(t))).explode()
        elif kind in CATEGORY_COLUMNS:
            values = self._artworks[kind]
        else:
            raise ValueError(f"Unknown category type: {kind}")

        values = values.dropna().astype(str)
        values = values[values.str.strip() != ""]
        counts = values.value_counts().sort_index().sort_values(ascending=False, kind="mergesort")
        return [(str(name), int(count)) for name, count in counts.items()]


_store: ArtworkStore | None = None


def _read_csv(path: Path) -> pd.DataFrame:
    # Keep text columns as str so values like "1916" are not parsed as numbers.
    header = pd.read_csv(path, nrows=0).columns
    return pd.read_csv(path, dtype={c: str for c in _TEXT_COLUMNS if c in header})


def load_store(config: DataConfig = DEFAULT_DATA_CONFIG) -> ArtworkStore:
    artworks = _read_csv(config.artworks_path)
    artists = _read_csv(config.artists_path)
    store = ArtworkStore(artworks, artists)
    logger.info(
        "Loaded %d artworks and %d artists from %s",
        len(store), store.artist_count, config.processed_data_dir,
    )
    return store


def get_store() -> ArtworkStore:
    """Return the process-wide artwork store, loading it on first call."""
    global _store
    if _store is None:
        _store = load_store()
    return _store


def set_store(store: ArtworkStore | None) -> None:
    """Replace the process-wide store; ``None`` forces a reload on next use."""
    global _store
    _store = store
