from __future__ import annotations

import pytest

from artfinder.categories.models import CategoryType
from artfinder.categories.related import (
    ArtworkNotFound,
    category_cache,
    extract_categories,
    get_related_categories,
    list_categories,
    slugify,
)
from artfinder.recommendations.data_store import ArtworkStore, get_store, set_store

from .conftest import ARTISTS, make_artwork


def test_slugify():
    assert slugify("Genre  Painting") == "genre-painting"
    assert slugify("Impressionism") == "impressionism"


def test_related_categories_ordered_by_count(store):
    related = get_related_categories(store, 100)
    assert [(c.type.value, c.name, c.count) for c in related] == [
        ("technique", "oil", 8),
        ("style", "Impressionism", 7),
        ("tag", "water", 5),
        ("genre", "landscape", 3),
        ("period", "Early", 2),
    ]


def test_related_categories_respects_limit(store):
    related = get_related_categories(store, 100, limit=10)
    assert len(related) == 7
    assert [c.name for c in related[-2:]] == ["sun", "boats"]


def test_related_categories_skip_missing_attributes(store):
    related = get_related_categories(store, 401, limit=10)
    assert {c.type for c in related} == {CategoryType.style, CategoryType.genre, CategoryType.technique}


def test_related_categories_unknown_artwork(store):
    with pytest.raises(ArtworkNotFound):
        get_related_categories(store, 999)


def test_extract_categories(store):
    categories = extract_categories(store.fetch_artwork(100))
    assert categories[CategoryType.style] == ["Impressionism"]
    assert categories[CategoryType.period] == ["Early"]
    assert categories[CategoryType.tag] == ["water", "sun", "boats"]


def test_list_categories(store):
    styles = list_categories(store, CategoryType.style)
    assert [(c.id, c.count) for c in styles] == [("impressionism", 7), ("cubism", 2)]


def test_list_categories_limit(store):
    genres = list_categories(store, CategoryType.genre, limit=2)
    assert [c.name for c in genres] == ["genre painting", "landscape"]


def test_list_categories_served_from_cache(store):
    list_categories(store, CategoryType.tag)
    list_categories(store, CategoryType.tag)
    stats = category_cache.stats()
    assert stats["misses"] == 1
    assert stats["hits"] == 1
    assert stats["size"] == 1


def test_list_categories_follows_replaced_store(store):
    assert [c.name for c in list_categories(store, CategoryType.style)] == ["Impressionism", "Cubism"]

    set_store(ArtworkStore.from_records([make_artwork(10, 1, 1905, "Fauvism")], ARTISTS))
    assert [c.name for c in list_categories(get_store(), CategoryType.style)] == ["Fauvism"]


def test_reloaded_store_gets_its_own_cache_entry():
    first = ArtworkStore.from_records([make_artwork(10, 1, 1905, "Fauvism")], ARTISTS)
    second = ArtworkStore.from_records([make_artwork(10, 1, 1905, "Fauvism")], ARTISTS)
    assert first.version != second.version

    list_categories(first, CategoryType.style)
    list_categories(second, CategoryType.style)
    assert category_cache.stats()["misses"] == 2


def test_related_categories_match_extracted_values(store):
    artwork = store.fetch_artwork(102)
    extracted = extract_categories(artwork)
    related = get_related_categories(store, 102, limit=10)
    expected = {(kind, name) for kind, names in extracted.items() for name in names}
    assert {(c.type, c.name) for c in related} == expected


def test_related_categories_cap_tags():
    store = ArtworkStore.from_records(
        [make_artwork(10, 1, 1905, tags="a, b, c, d, e")], ARTISTS
    )
    related = get_related_categories(store, 10, limit=10)
    assert [c.name for c in related] == ["a", "b", "c"]
