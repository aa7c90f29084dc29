import math
from enum import Enum
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class SortControl(BaseModel):
    sort_field: str
    sort_direction: SortDirection = SortDirection.asc


class PageRequest(BaseModel):
    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1, le=100)
    sort: List[SortControl] = Field(default_factory=list)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def build(cls, items: List[T], request: PageRequest, total_elements: int) -> "Page[T]":
        return cls(
            items=items,
            page=request.page,
            size=request.size,
            total_elements=total_elements,
            total_pages=math.ceil(total_elements / request.size) if total_elements else 0,
        )
