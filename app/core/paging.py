from dataclasses import dataclass
from fastapi import Query
from .config import settings

@dataclass(frozen=True)
class Page:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
) -> Page:
    return Page(page=page, limit=limit)

def contains_pattern(query: str) -> str:
    """Lower-cased LIKE pattern matching ``query`` anywhere, backslash-escaped."""
    q = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{q}%"
