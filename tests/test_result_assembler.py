"""Tests for page statistics and list response assembly."""

from recordhub.query import (
    ARTICLE_QUERY, EMPLOYEE_QUERY, assemble, paginate, resolve_page, resolve_sort,
    summarize_articles, summarize_employees,
)
from recordhub.query.result_assembler import markup, profit_margin


def test_article_statistics_over_three_prices():
    records = [
        {"salesPrice": 10, "packageSize": 1, "purchasePrice": 5},
        {"salesPrice": 20, "packageSize": 1, "purchasePrice": 10},
        {"salesPrice": 30, "packageSize": 1, "purchasePrice": 15},
    ]

    stats = summarize_articles(records)

    assert stats["averageSalesPrice"] == 20
    assert stats["totalInventoryValue"] == 60
    assert stats["highestSalesPrice"] == 30
    assert stats["lowestSalesPrice"] == 10
    assert stats["averageProfitMargin"] == 50
    assert stats["count"] == 3


def test_inventory_value_multiplies_package_size():
    stats = summarize_articles([
        {"salesPrice": 2.5, "packageSize": 4},
        {"salesPrice": 1, "packageSize": 0},
    ])

    assert stats["totalInventoryValue"] == 10


def test_empty_window_is_all_zero():
    stats = summarize_articles([])

    assert stats["count"] == 0
    assert all(value == 0 for value in stats.values())


def test_missing_prices_count_as_zero():
    stats = summarize_articles([{"articleName": "No prices"}])

    assert stats["averageSalesPrice"] == 0
    assert stats["lowestSalesPrice"] == 0


def test_margin_and_markup():
    assert profit_margin(50, 100) == 50
    assert markup(50, 100) == 100
    assert profit_margin(0, 100) == 0
    assert markup(10, 0) == 0


def test_employee_distributions():
    stats = summarize_employees([
        {"department": "Sales", "job": "Sales Representative"},
        {"department": "Sales", "job": "Sales Representative"},
        {"department": "IT", "job": "IT Specialist"},
        {"job": None},
    ])

    assert stats["count"] == 4
    assert stats["departmentDistribution"] == {"Sales": 2, "IT": 1, "Other": 1}
    assert stats["jobDistribution"]["Employee"] == 1


def test_empty_employee_window():
    assert summarize_employees([]) == {
        "count": 0,
        "departmentDistribution": {},
        "jobDistribution": {},
    }


def test_assembled_response_shape():
    records = [{"name": "Ann"}]
    info = paginate(resolve_page(EMPLOYEE_QUERY, 1, 10), 1)
    sort = resolve_sort(EMPLOYEE_QUERY, "bogus", "desc")

    body = assemble(EMPLOYEE_QUERY, records, info, "ann", sort, summarize_employees(records))

    assert body["employees"] is records
    assert body["pagination"]["totalCount"] == 1
    assert body["search"] == {"term": "ann", "resultsFound": 1}
    assert body["sort"] == {"field": "name", "order": "desc"}
    assert body["total"] == 1
    assert "timestamp" in body["meta"]


def test_statistics_do_not_touch_records():
    records = [{"salesPrice": 10, "packageSize": 1}]
    snapshot = [dict(r) for r in records]
    info = paginate(resolve_page(ARTICLE_QUERY, 1, 10), 1)

    body = assemble(ARTICLE_QUERY, records, info, "", resolve_sort(ARTICLE_QUERY, None, None),
                    summarize_articles(records))

    assert body["articles"] == snapshot
