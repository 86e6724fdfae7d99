"""
Result Assembler - list response body and statistics over the returned page.

Statistics only describe the records in the page window. They are computed
after the records are fetched and never change which records are returned.
"""
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from .entities import EntityQueryConfig
from .pager import PageInfo
from .sort_resolver import SortSpec


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


def profit_margin(purchase_price: Any, sales_price: Any) -> int:
    """Profit as a whole-number percentage of the sales price."""
    purchase, sales = _number(purchase_price), _number(sales_price)
    if not purchase or not sales:
        return 0
    return round((sales - purchase) / sales * 100)


def markup(purchase_price: Any, sales_price: Any) -> int:
    """Profit as a whole-number percentage of the purchase price."""
    purchase, sales = _number(purchase_price), _number(sales_price)
    if not purchase or not sales:
        return 0
    return round((sales - purchase) / purchase * 100)


def summarize_articles(records: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    records = list(records)
    if not records:
        return {
            "count": 0,
            "totalInventoryValue": 0,
            "averageSalesPrice": 0,
            "averagePurchasePrice": 0,
            "highestSalesPrice": 0,
            "lowestSalesPrice": 0,
            "averageProfitMargin": 0,
        }

    sales_prices = [_number(r.get('salesPrice')) for r in records]
    purchase_prices = [_number(r.get('purchasePrice')) for r in records]
    inventory_value = sum(
        _number(r.get('salesPrice')) * _number(r.get('packageSize'))
        for r in records
    )
    margins = [profit_margin(r.get('purchasePrice'), r.get('salesPrice')) for r in records]
    count = len(records)

    return {
        "count": count,
        "totalInventoryValue": round(inventory_value, 2),
        "averageSalesPrice": round(sum(sales_prices) / count, 2),
        "averagePurchasePrice": round(sum(purchase_prices) / count, 2),
        "highestSalesPrice": max(sales_prices),
        "lowestSalesPrice": min(sales_prices),
        "averageProfitMargin": round(sum(margins) / count, 2),
    }


def summarize_employees(records: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    records = list(records)
    departments = Counter(r.get('department') or 'Other' for r in records)
    jobs = Counter(r.get('job') or 'Employee' for r in records)
    return {
        "count": len(records),
        "departmentDistribution": dict(departments.most_common()),
        "jobDistribution": dict(jobs.most_common()),
    }


def assemble(entity: EntityQueryConfig, records: List[Dict[str, Any]], page_info: PageInfo,
             search_term: str, sort: SortSpec, statistics: Dict[str, Any]) -> Dict[str, Any]:
    """Build the list endpoint response body."""
    return {
        entity.plural: records,
        "pagination": page_info.to_dict(),
        "search": {
            "term": search_term,
            "resultsFound": page_info.total_count,
        },
        "sort": sort.to_dict(),
        "statistics": statistics,
        "meta": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        # Older clients read the count from here
        "total": page_info.total_count,
    }
