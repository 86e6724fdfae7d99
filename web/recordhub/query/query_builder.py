"""
Query Builder - turns raw search/filter parameters into a query descriptor.

The descriptor does not depend on MongoDB; ``QueryDescriptor.to_mongo`` is the
only place that knows the storage query language. Search terms are always
escaped before they become a ``$regex`` so user input is matched literally.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .entities import EntityQueryConfig

NUMERIC_TOLERANCE = 0.10


@dataclass(frozen=True)
class QueryDescriptor:
    """Normalized filter/search criteria for one list request."""
    term: str = ''
    text_fields: Tuple[str, ...] = ()
    exact_numeric: Tuple[Tuple[str, float], ...] = ()
    ranges: Tuple[Tuple[str, float, float], ...] = ()
    filters: Tuple[Tuple[str, str], ...] = ()

    @property
    def matches_all(self) -> bool:
        return not self.term and not self.filters

    def to_mongo(self) -> Dict[str, Any]:
        """Render the descriptor as a MongoDB filter document."""
        clauses = []

        if self.term:
            pattern = re.escape(self.term)
            alternatives = [
                {field: {'$regex': pattern, '$options': 'i'}}
                for field in self.text_fields
            ]
            alternatives.extend({field: value} for field, value in self.exact_numeric)
            alternatives.extend(
                {field: {'$gte': low, '$lte': high}}
                for field, low, high in self.ranges
            )
            clauses.append({'$or': alternatives})

        for field, value in self.filters:
            clauses.append({field: value})

        if not clauses:
            return {}
        if len(clauses) == 1:
            return clauses[0]
        return {'$and': clauses}


def parse_numeric_term(term: str) -> Optional[float]:
    """Return the term as a finite number, or None when it is not numeric."""
    try:
        value = float(term)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def tolerance_range(value: float, tolerance: float = NUMERIC_TOLERANCE) -> Tuple[float, float]:
    low, high = value * (1 - tolerance), value * (1 + tolerance)
    return min(low, high), max(low, high)


def build_query(entity: EntityQueryConfig, search_term: Optional[str],
                filters: Optional[Mapping[str, Optional[str]]] = None) -> QueryDescriptor:
    """
    Build the query descriptor for a list request.

    Args:
        entity: Query settings of the entity being listed
        search_term: Raw search text; blank means match all
        filters: Field -> value pairs; fields outside the entity's filter
            allow-list and blank values are dropped

    Returns:
        QueryDescriptor
    """
    term = (search_term or '').strip()

    exact_numeric = []
    ranges = []
    numeric = parse_numeric_term(term) if term else None
    if numeric is not None:
        for field in entity.exact_numeric_fields:
            if field in entity.integer_fields:
                if numeric.is_integer():
                    exact_numeric.append((field, int(numeric)))
            else:
                exact_numeric.append((field, numeric))
        for field in entity.tolerance_numeric_fields:
            low, high = tolerance_range(numeric)
            ranges.append((field, low, high))

    kept_filters = []
    for field, value in (filters or {}).items():
        if field not in entity.filter_fields or value is None:
            continue
        value = str(value).strip()
        if value:
            kept_filters.append((field, value))

    return QueryDescriptor(
        term=term,
        text_fields=entity.text_fields if term else (),
        exact_numeric=tuple(exact_numeric),
        ranges=tuple(ranges),
        filters=tuple(kept_filters),
    )
