import math
from dataclasses import dataclass
from typing import Any, Sequence

from app.core.config import settings


@dataclass
class Page:
    items: list[Any]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def meta(self) -> dict:
        return {
            "currentPage": self.page,
            "pages": self.pages,
            "totalItems": self.total,
            "hasNext": self.page < self.pages,
            "hasPrevious": self.page > 1,
        }


def paginate(items: Sequence[Any], page: int | None = None, limit: int | None = None) -> Page:
    page = max(1, page or 1)
    limit = max(1, min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE))
    start = (page - 1) * limit
    return Page(items=list(items[start:start + limit]), page=page, limit=limit, total=len(items))
