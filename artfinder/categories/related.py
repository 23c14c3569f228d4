from __future__ import annotations

import logging
import re

from ..recommendations.data_store import ArtworkStore
from ..recommendations.models import ReferenceArtwork
from ..recommendations.similarity import split_tags
from .cache import TTLCache
from .config import DEFAULT_CATEGORY_CONFIG, CategoryConfig
from .models import Category, CategoryType

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")

category_cache = TTLCache(ttl=DEFAULT_CATEGORY_CONFIG.cache_ttl)


class ArtworkNotFound(LookupError):
    pass


def slugify(name: str) -> str:
    return _WHITESPACE_RE.sub("-", name.lower())


def extract_categories(artwork: ReferenceArtwork) -> dict[CategoryType, list[str]]:
    """Group an artwork's categorical attributes by category type."""
    categories: dict[CategoryType, list[str]] = {t: [] for t in CategoryType}
    for kind in (CategoryType.style, CategoryType.genre, CategoryType.period, CategoryType.technique):
        value = getattr(artwork, kind.value)
        if value:
            categories[kind].append(value)
    categories[CategoryType.tag] = split_tags(artwork.tags)
    return categories


def get_related_categories(
    store: ArtworkStore,
    artwork_id: int,
    limit: int | None = None,
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
) -> list[Category]:
    """
    Categories an artwork belongs to, for "more like this" navigation.

    Uses the artwork's style, genre, period and technique plus its first few
    tags, each with the number of artworks sharing it. Most populated first.
    """
    if limit is None:
        limit = config.related_limit

    artwork = store.fetch_artwork(artwork_id)
    if artwork is None:
        raise ArtworkNotFound(f"Artwork {artwork_id} not found")

    categories: list[Category] = []
    # Keys follow CategoryType order: style, genre, period, technique, tag.
    for kind, names in extract_categories(artwork).items():
        if kind is CategoryType.tag:
            names = names[: config.max_related_tags]
        for name in names:
            count = (
                store.count_tag(name)
                if kind is CategoryType.tag
                else store.count_by(kind.value, name)
            )
            categories.append(Category(id=slugify(name), name=name, type=kind, count=count))

    # sorted() is stable, so equal counts keep attribute order
    categories = sorted(categories, key=lambda c: c.count, reverse=True)
    return categories[:limit]


def list_categories(
    store: ArtworkStore,
    kind: CategoryType,
    limit: int | None = None,
    cache: TTLCache = category_cache,
    config: CategoryConfig = DEFAULT_CATEGORY_CONFIG,
) -> list[Category]:
    if limit is None:
        limit = config.list_limit

    key = cache.make_key("categories", store.version, kind.value, limit)
    cached = cache.get(key)
    if cached is not None:
        return cached

    values = store.category_values(kind.value)[:limit]
    result = [
        Category(id=slugify(name), name=name, type=kind, count=count)
        for name, count in values
    ]
    logger.debug("Cached %d %s categories", len(result), kind.value)
    cache.set(key, result)
    return result
