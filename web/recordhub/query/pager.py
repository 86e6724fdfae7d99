"""
Pager - page window and page metadata for list responses.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .entities import EntityQueryConfig

# MongoDB rejects a skip that does not fit in a signed 64-bit integer
MAX_SKIP = 2 ** 63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageInfo:
    current_page: int
    total_pages: int
    total_count: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool
    start_index: int
    end_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalCount": self.total_count,
            "itemsPerPage": self.items_per_page,
            "hasNextPage": self.has_next_page,
            "hasPrevPage": self.has_prev_page,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
        }


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None


def resolve_page(entity: EntityQueryConfig, page: Any = None, limit: Any = None) -> PageRequest:
    """
    Parse and clamp raw page parameters.

    Unparsable ``page`` becomes 1 and unparsable ``limit`` becomes the entity
    default. ``limit`` is clamped to 1..max_limit and ``page`` to at least 1
    and at most the last page whose skip still fits in ``MAX_SKIP``.
    """
    page_num = _to_int(page)
    if page_num is None:
        page_num = 1
    limit_num = _to_int(limit)
    if limit_num is None:
        limit_num = entity.default_limit

    limit_num = min(entity.max_limit, max(1, limit_num))
    page_num = min(MAX_SKIP // limit_num + 1, max(1, page_num))
    return PageRequest(page=page_num, limit=limit_num)


def paginate(request: PageRequest, total_count: int) -> PageInfo:
    """Derive page metadata from the page window and the matching record count."""
    total_pages = math.ceil(total_count / request.limit)
    return PageInfo(
        current_page=request.page,
        total_pages=total_pages,
        total_count=total_count,
        items_per_page=request.limit,
        has_next_page=request.page < total_pages,
        has_prev_page=request.page > 1,
        start_index=request.skip + 1,
        end_index=min(request.skip + request.limit, total_count),
    )
