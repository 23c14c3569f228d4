from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from ..recommendations.data_store import ARTIST_COLUMNS, ARTWORK_COLUMNS
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)

# Catalog API field name -> canonical column
ARTWORK_FIELD_MAP: Dict[str, str] = {
    "contentId": "content_id",
    "artistContentId": "artist_content_id",
    "artistName": "artist_name",
    "artistUrl": "artist_url",
    "title": "title",
    "url": "url",
    "completitionYear": "completition_year",
    "yearAsString": "year_as_string",
    "style": "style",
    "genre": "genre",
    "period": "period",
    "technique": "technique",
    "tags": "tags",
    "dictionaries": "dictionaries",
    "image": "image",
}


def _is_missing(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return False
    return value is None or bool(pd.isna(value))


def _normalize_tags(tags: Any) -> str | None:
    if _is_missing(tags):
        return None
    if isinstance(tags, (list, tuple)):
        items = [str(t).strip() for t in tags if str(t).strip()]
        return ", ".join(items) or None
    text = str(tags).strip()
    return text or None


def _normalize_dictionaries(values: Any) -> str | None:
    """Serialise the integer category ids as a JSON array; non-integer ids are dropped."""
    if _is_missing(values):
        return None
    if not isinstance(values, (list, tuple)):
        values = [values]
    ids: list[int] = []
    for v in values:
        try:
            ids.append(int(v))
        except (TypeError, ValueError):
            continue
    return json.dumps(ids)


def _load_raw(path: Path) -> pd.DataFrame:
    with path.open(encoding="utf-8") as f:
        records = json.load(f)
    # The catalog API wraps paginated results as {"data": [...]}.
    if isinstance(records, dict):
        records = records.get("data", [])
    return pd.DataFrame.from_records(records)


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> tuple[Path, Path]:
    """
    Execute the catalog ingestion pipeline.

    Steps:
    - Load the raw artwork export produced by the catalog API.
    - Map raw fields into the canonical artwork and artist schemas.
    - Drop unusable records and de-duplicate on content id (last wins).
    - Persist both tables as CSV for the artwork store.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    raw = _load_raw(config.raw_path)

    canonical = pd.DataFrame(index=raw.index)
    for raw_col, col in ARTWORK_FIELD_MAP.items():
        canonical[col] = raw[raw_col] if raw_col in raw.columns else None

    canonical["content_id"] = pd.to_numeric(canonical["content_id"], errors="coerce")
    canonical["artist_content_id"] = pd.to_numeric(
        canonical["artist_content_id"], errors="coerce"
    )

    total = len(canonical)
    canonical = canonical.dropna(subset=["content_id", "artist_content_id"])
    canonical = canonical[canonical["title"].fillna("").astype(str).str.strip() != ""].copy()
    if len(canonical) < total:
        logger.warning("Dropped %d catalog records missing id, artist or title", total - len(canonical))

    canonical["content_id"] = canonical["content_id"].astype(int)
    canonical["artist_content_id"] = canonical["artist_content_id"].astype(int)
    canonical["completition_year"] = pd.to_numeric(
        canonical["completition_year"], errors="coerce"
    ).astype("Int64")
    canonical["tags"] = canonical["tags"].apply(_normalize_tags)
    canonical["dictionaries"] = canonical["dictionaries"].apply(_normalize_dictionaries)
    canonical["image"] = (
        canonical["image"]
        .fillna("")
        .astype(str)
        .str.replace(config.thumbnail_suffix, "", regex=False)
    )

    canonical = canonical.drop_duplicates("content_id", keep="last").sort_values(
        "content_id", kind="mergesort"
    )

    artists = (
        canonical[["artist_content_id", "artist_name", "artist_url"]]
        .rename(columns={"artist_content_id": "content_id", "artist_url": "url"})
        .drop_duplicates("content_id", keep="last")
        .sort_values("content_id", kind="mergesort")
    )[ARTIST_COLUMNS]

    artworks = canonical[ARTWORK_COLUMNS]

    artworks.to_csv(config.artworks_path, index=False)
    artists.to_csv(config.artists_path, index=False)
    logger.info("Ingested %d artworks by %d artists", len(artworks), len(artists))
    return config.artworks_path, config.artists_path


if __name__ == "__main__":
    artworks_path, artists_path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {artworks_path}, {artists_path}")
