"""
Per-entity query settings shared by the list engine.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EntityQueryConfig:
    """Searchable, sortable and filterable fields plus page bounds of one entity."""
    name: str
    plural: str
    text_fields: Tuple[str, ...]
    exact_numeric_fields: Tuple[str, ...]
    integer_fields: Tuple[str, ...]
    tolerance_numeric_fields: Tuple[str, ...]
    sort_fields: Tuple[str, ...]
    default_sort: str
    filter_fields: Tuple[str, ...]
    default_limit: int
    max_limit: int


ARTICLE_QUERY = EntityQueryConfig(
    name='article',
    plural='articles',
    text_fields=('articleName', 'unit', 'category'),
    exact_numeric_fields=('articleNumber', 'packageSize'),
    integer_fields=('articleNumber',),
    tolerance_numeric_fields=('purchasePrice', 'salesPrice'),
    sort_fields=(
        'articleNumber', 'articleName', 'unit', 'packageSize',
        'purchasePrice', 'salesPrice', 'category', 'createdAt',
    ),
    default_sort='articleNumber',
    filter_fields=('category', 'unit'),
    default_limit=50,
    max_limit=1000,
)

EMPLOYEE_QUERY = EntityQueryConfig(
    name='employee',
    plural='employees',
    text_fields=('name', 'email', 'phone', 'job'),
    exact_numeric_fields=(),
    integer_fields=(),
    tolerance_numeric_fields=(),
    sort_fields=('name', 'email', 'phone', 'job', 'department', 'createdAt'),
    default_sort='name',
    filter_fields=('department',),
    default_limit=25,
    max_limit=500,
)
