from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CategoryConfig:
    cache_ttl: float = float(os.getenv("ARTFINDER_CATEGORY_CACHE_TTL", str(24 * 60 * 60)))
    related_limit: int = 5
    max_related_tags: int = 3
    list_limit: int = 100


DEFAULT_CATEGORY_CONFIG = CategoryConfig()
