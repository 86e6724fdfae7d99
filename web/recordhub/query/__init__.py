"""List engine: query building, sorting, paging and result assembly"""
from .entities import ARTICLE_QUERY, EMPLOYEE_QUERY, EntityQueryConfig
from .pager import PageInfo, PageRequest, paginate, resolve_page
from .query_builder import QueryDescriptor, build_query
from .result_assembler import assemble, summarize_articles, summarize_employees
from .sort_resolver import SortSpec, resolve_sort

__all__ = [
    'ARTICLE_QUERY', 'EMPLOYEE_QUERY', 'EntityQueryConfig',
    'PageInfo', 'PageRequest', 'paginate', 'resolve_page',
    'QueryDescriptor', 'build_query',
    'assemble', 'summarize_articles', 'summarize_employees',
    'SortSpec', 'resolve_sort',
]
