"""Tests for search/filter query construction."""

import re

import pytest

from recordhub.query import ARTICLE_QUERY, EMPLOYEE_QUERY, build_query
from recordhub.query.query_builder import parse_numeric_term, tolerance_range


@pytest.mark.parametrize("term", [None, "", "   ", "\t\n"])
def test_blank_search_matches_everything(term):
    descriptor = build_query(EMPLOYEE_QUERY, term)

    assert descriptor.matches_all
    assert descriptor.to_mongo() == {}


def test_text_search_covers_every_employee_text_field():
    mongo_filter = build_query(EMPLOYEE_QUERY, "  alice ").to_mongo()

    assert mongo_filter == {
        "$or": [
            {"name": {"$regex": "alice", "$options": "i"}},
            {"email": {"$regex": "alice", "$options": "i"}},
            {"phone": {"$regex": "alice", "$options": "i"}},
            {"job": {"$regex": "alice", "$options": "i"}},
        ]
    }


def test_regex_metacharacters_are_escaped():
    term = ".*(a|b)+$"
    mongo_filter = build_query(EMPLOYEE_QUERY, term).to_mongo()

    pattern = mongo_filter["$or"][0]["name"]["$regex"]
    assert pattern == re.escape(term)
    assert re.search(pattern, "xx.*(a|b)+$yy")
    assert not re.search(pattern, "anything else")


def test_non_numeric_article_search_has_no_numeric_clauses():
    mongo_filter = build_query(ARTICLE_QUERY, "hammer").to_mongo()

    fields = [next(iter(clause)) for clause in mongo_filter["$or"]]
    assert fields == ["articleName", "unit", "category"]


def test_numeric_article_search_adds_exact_and_tolerance_matches():
    mongo_filter = build_query(ARTICLE_QUERY, "100").to_mongo()
    clauses = mongo_filter["$or"]

    assert {"articleNumber": 100} in clauses
    assert {"packageSize": 100.0} in clauses
    price = next(c["salesPrice"] for c in clauses if "salesPrice" in c)
    assert price["$gte"] == pytest.approx(90)
    assert price["$lte"] == pytest.approx(110)
    purchase = next(c["purchasePrice"] for c in clauses if "purchasePrice" in c)
    assert purchase["$gte"] == pytest.approx(90)


def test_fractional_search_skips_integer_article_number():
    clauses = build_query(ARTICLE_QUERY, "12.5").to_mongo()["$or"]

    assert not any("articleNumber" in clause for clause in clauses)
    assert {"packageSize": 12.5} in clauses


@pytest.mark.parametrize("term", ["nan", "inf", "-infinity", "12abc", "1e"])
def test_non_finite_or_partial_numbers_are_not_numeric(term):
    assert parse_numeric_term(term) is None


def test_tolerance_range_is_ordered_for_negative_values():
    low, high = tolerance_range(-10)

    assert low == pytest.approx(-11)
    assert high == pytest.approx(-9)


def test_filter_is_combined_with_search():
    mongo_filter = build_query(EMPLOYEE_QUERY, "ann", {"department": " Sales "}).to_mongo()

    assert mongo_filter["$and"][1] == {"department": "Sales"}
    assert "$or" in mongo_filter["$and"][0]


def test_filter_alone_is_a_plain_match():
    descriptor = build_query(EMPLOYEE_QUERY, "", {"department": "HR"})

    assert not descriptor.matches_all
    assert descriptor.to_mongo() == {"department": "HR"}


def test_unknown_and_blank_filters_are_dropped():
    descriptor = build_query(ARTICLE_QUERY, "", {"salesPrice": "10", "unit": "  ", "category": None})

    assert descriptor.filters == ()
    assert descriptor.to_mongo() == {}
