"""
Catalog ingestion package.

Responsibilities:
- Read a raw artwork export from the art catalog API.
- Normalize it into the canonical artwork and artist schemas.
- Persist the processed CSVs consumed by the artwork store.
"""
