from __future__ import annotations

import pytest

from artfinder.analytics.store import clear_events
from artfinder.categories.related import category_cache
from artfinder.recommendations.data_store import ArtworkStore, set_store

ARTISTS = [
    {"content_id": 1, "artist_name": "Claude Monet", "url": "claude-monet"},
    {"content_id": 2, "artist_name": "Pierre-Auguste Renoir", "url": "pierre-auguste-renoir"},
    {"content_id": 3, "artist_name": "Edgar Degas", "url": "edgar-degas"},
    {"content_id": 4, "artist_name": "Pablo Picasso", "url": "pablo-picasso"},
]


def make_artwork(
    content_id,
    artist_id,
    year,
    style=None,
    genre=None,
    period=None,
    technique=None,
    tags=None,
    dictionaries=None,
    title=None,
    image=None,
):
    return {
        "content_id": content_id,
        "artist_content_id": artist_id,
        "title": title or f"Artwork {content_id}",
        "completition_year": year,
        "year_as_string": str(year) if year is not None else None,
        "style": style,
        "genre": genre,
        "period": period,
        "technique": technique,
        "tags": tags,
        "dictionaries": dictionaries,
        "image": image or f"https://uploads.example.org/images/{content_id}.jpg!Large.jpg",
    }


ARTWORKS = [
    make_artwork(100, 1, 1872, "Impressionism", "landscape", "Early", "oil",
                 "water, sun, boats", [1, 2, 3], title="Impression, Sunrise"),
    make_artwork(101, 1, 1899, "Impressionism", "landscape", "Late", "oil",
                 "water, bridge", [1, 2], title="The Japanese Footbridge"),
    make_artwork(102, 1, 1906, "Impressionism", "flower painting", "Late", "oil",
                 "water, flowers", [1, 4], title="Water Lilies"),
    make_artwork(200, 2, 1876, "Impressionism", "genre painting", "Early", "oil",
                 "dance, sun", [1, 3], title="Bal du moulin de la Galette"),
    make_artwork(201, 2, 1881, "Impressionism", "genre painting", None, "oil",
                 "boats, water", [1, 2, 3], title="Luncheon of the Boating Party"),
    make_artwork(300, 3, 1874, "Impressionism", "genre painting", None, "pastel",
                 "dance", [5], title="The Dance Class"),
    make_artwork(400, 4, 1937, "Cubism", "history painting", None, "oil",
                 "war", [9], title="Guernica"),
    make_artwork(401, 4, None, "Cubism", "still life", None, "oil"),
    # Artist 99 has no artist record.
    make_artwork(500, 99, 1870, "Impressionism", "landscape", None, "oil", "water"),
]


@pytest.fixture
def store() -> ArtworkStore:
    return ArtworkStore.from_records(ARTWORKS, ARTISTS)


@pytest.fixture(autouse=True)
def _reset_state(store):
    set_store(store)
    category_cache.clear()
    clear_events()
    yield
    set_store(None)
