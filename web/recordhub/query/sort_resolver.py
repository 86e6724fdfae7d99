"""
Sort Resolver - maps requested sort parameters onto an allow-listed field.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from .entities import EntityQueryConfig


@dataclass(frozen=True)
class SortSpec:
    field: str
    order: str = 'asc'

    @property
    def direction(self) -> int:
        return DESCENDING if self.order == 'desc' else ASCENDING

    def to_mongo(self) -> List[Tuple[str, int]]:
        # _id breaks ties so equal sort keys keep a stable page order
        keys = [(self.field, self.direction)]
        if self.field != '_id':
            keys.append(('_id', ASCENDING))
        return keys

    def to_dict(self):
        return {"field": self.field, "order": self.order}


def resolve_sort(entity: EntityQueryConfig, sort_by: Optional[str],
                 sort_order: Optional[str]) -> SortSpec:
    """Unknown fields fall back to the entity default; only "desc" sorts descending."""
    field = sort_by if sort_by in entity.sort_fields else entity.default_sort
    order = 'desc' if sort_order == 'desc' else 'asc'
    return SortSpec(field=field, order=order)
