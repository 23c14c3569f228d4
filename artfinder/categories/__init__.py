"""
Artwork categories.

Responsibilities:
- Derive "more like this" categories from a reference artwork.
- List the distinct styles, genres, periods, techniques and tags in the store.
- Cache category listings behind an explicit TTL cache.
"""
