from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class CategoryType(str, Enum):
    style = "style"
    genre = "genre"
    period = "period"
    technique = "technique"
    tag = "tag"


class Category(BaseModel):
    id: str
    name: str
    type: CategoryType
    count: int = 0
