"""Tests for the HTTP endpoints."""

from bson import ObjectId
from pymongo.errors import PyMongoError

from recordhub.model import Database


def _create_article(client, make_article, number, **overrides):
    response = client.post("/api/articles", json=make_article(number, **overrides))
    assert response.status_code == 201
    return response.get_json()["article"]


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json()["components"]["mongodb"] == "connected"


def test_article_list_response_shape(client, make_article):
    for number in range(1, 4):
        _create_article(client, make_article, number, salesPrice=number * 10)

    response = client.get("/api/articles?page=1&limit=2&sortBy=salesPrice&sortOrder=desc")
    body = response.get_json()

    assert response.status_code == 200
    assert set(body) >= {"articles", "pagination", "search", "sort", "statistics", "total"}
    assert [a["articleNumber"] for a in body["articles"]] == [3, 2]
    assert body["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalCount": 3,
        "itemsPerPage": 2,
        "hasNextPage": True,
        "hasPrevPage": False,
        "startIndex": 1,
        "endIndex": 2,
    }
    assert body["search"] == {"term": "", "resultsFound": 3}
    assert body["sort"] == {"field": "salesPrice", "order": "desc"}
    assert body["total"] == 3


def test_article_list_handles_garbage_parameters(client, make_article):
    _create_article(client, make_article, 1)

    body = client.get("/api/articles?page=abc&limit=-1&sortBy=__proto__&sortOrder=DESC").get_json()

    assert body["pagination"]["currentPage"] == 1
    assert body["pagination"]["itemsPerPage"] == 1
    assert body["sort"] == {"field": "articleNumber", "order": "asc"}


def test_article_crud_flow(client, make_article):
    article = _create_article(client, make_article, 10, articleName="Level")

    fetched = client.get(f"/api/articles/{article['_id']}")
    assert fetched.status_code == 200
    assert fetched.get_json()["articleName"] == "Level"

    updated = client.put(f"/api/articles/{article['_id']}", json=make_article(10, articleName="Spirit Level"))
    assert updated.status_code == 200
    assert updated.get_json()["article"]["articleName"] == "Spirit Level"

    deleted = client.delete(f"/api/articles/{article['_id']}")
    assert deleted.status_code == 200
    assert deleted.get_json()["deleted"]["articleNumber"] == 10

    assert client.get(f"/api/articles/{article['_id']}").status_code == 404


def test_duplicate_article_number_returns_conflict(client, make_article):
    _create_article(client, make_article, 1)

    response = client.post("/api/articles", json=make_article(1))

    assert response.status_code == 409
    body = response.get_json()
    assert body["success"] is False
    assert body["field"] == "articleNumber"


def test_validation_error_lists_fields(client):
    response = client.post("/api/articles", json={"articleNumber": 1, "salesPrice": -3})

    assert response.status_code == 400
    assert set(response.get_json()["fields"]) == {"articleName", "salesPrice"}


def test_non_json_body_is_rejected(client):
    response = client.post("/api/articles", data="not json", content_type="text/plain")

    assert response.status_code == 400


def test_invalid_id_is_a_client_error(client):
    assert client.get("/api/articles/not-an-id").status_code == 400
    assert client.delete(f"/api/employees/{ObjectId()}").status_code == 404


def test_bulk_create_reports_partial_failure(client, make_article):
    response = client.post("/api/articles/bulk", json={
        "articles": [make_article(1), make_article(1), make_article(2)]
    })
    body = response.get_json()

    assert response.status_code == 201
    assert body["created"] == 2
    assert body["failed"] == 1
    assert body["errors"][0]["index"] == 1
    assert len(body["createdIds"]) == 2


def test_bulk_create_with_nothing_valid(client):
    response = client.post("/api/articles/bulk", json={"articles": [{"articleName": "x"}]})

    assert response.status_code == 400
    assert response.get_json()["created"] == 0


def test_bulk_create_requires_array(client):
    response = client.post("/api/articles/bulk", json={"articles": "nope"})

    assert response.status_code == 400


def test_bulk_delete_with_missing_ids(client, make_article):
    ids = [_create_article(client, make_article, n)["_id"] for n in range(1, 4)]
    ids += [str(ObjectId()), str(ObjectId())]

    response = client.delete(f"/api/articles/bulk/{','.join(ids)}")
    body = response.get_json()

    assert response.status_code == 200
    assert body["deletedCount"] == 3
    assert body["failed"] == 2
    assert client.get("/api/articles").get_json()["total"] == 0


def test_article_stats_endpoint(client, make_article):
    _create_article(client, make_article, 1, salesPrice=20, packageSize=2)

    body = client.get("/api/articles/stats").get_json()

    assert body["success"] is True
    assert body["data"]["overview"]["totalInventoryValue"] == 40


def test_employee_list_with_department_filter(client):
    for payload in (
        {"name": "Anna Lund", "job": "Developer"},
        {"name": "Ben Holm", "job": "Accountant"},
        {"name": "Cleo Berg", "department": "Engineering"},
    ):
        assert client.post("/api/employees", json=payload).status_code == 201

    body = client.get("/api/employees?department=Engineering&sortOrder=desc").get_json()

    assert [e["name"] for e in body["employees"]] == ["Cleo Berg", "Anna Lund"]
    assert body["sort"] == {"field": "name", "order": "desc"}
    assert body["statistics"]["departmentDistribution"] == {"Engineering": 2}


def test_employee_search(client):
    client.post("/api/employees", json={"name": "Maja Nilsson", "email": "maja@example.com"})
    client.post("/api/employees", json={"name": "Nils Fors"})

    body = client.get("/api/employees?search=MAJA").get_json()

    assert [e["name"] for e in body["employees"]] == ["Maja Nilsson"]


def test_employee_bulk_endpoints(client):
    response = client.post("/api/employees/bulk", json={
        "employees": [{"name": "Ola Strand"}, {"name": "P"}]
    })
    body = response.get_json()

    assert response.status_code == 201
    assert body["created"] == 1
    assert "name" in body["errors"][0]["error"].lower()

    deleted = client.delete(f"/api/employees/bulk/{body['createdIds'][0]}").get_json()
    assert deleted["deletedCount"] == 1


def test_unknown_route_is_json(client):
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_article_number_beyond_int64_is_a_validation_error(client, make_article):
    response = client.post("/api/articles", json=make_article(10 ** 19))

    assert response.status_code == 400
    assert "articleNumber" in response.get_json()["fields"]


def test_huge_page_number_returns_empty_page(client, make_article):
    _create_article(client, make_article, 1)

    response = client.get(f"/api/articles?page={10 ** 17}&limit=1000")
    body = response.get_json()

    assert response.status_code == 200
    assert body["articles"] == []
    assert body["pagination"]["hasPrevPage"] is True


def test_storage_failure_is_reported_as_server_error(client, make_article, monkeypatch):
    _create_article(client, make_article, 1)
    collection_type = type(Database().get_collection("articles"))

    def failing_count(self, *args, **kwargs):
        raise PyMongoError("server selection timed out")

    monkeypatch.setattr(collection_type, "count_documents", failing_count)

    response = client.get("/api/articles")
    body = response.get_json()

    assert response.status_code == 500
    assert body["success"] is False
    assert body["error"] == "Database error while listing article"
    assert body["cause"] == "server selection timed out"
