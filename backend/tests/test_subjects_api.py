from classroom_api.repositories import SubjectRepository


def _codes(body):
    return [row["code"] for row in body["data"]]


def test_root_reports_running(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"message": "Classroom API is running"}


def test_list_without_filters_returns_everything_newest_first(client, seeded):
    r = client.get("/api/v1/subjects")
    assert r.status_code == 200
    body = r.json()
    assert _codes(body) == ["LOST1", "MATH101", "MATH150", "CS301", "CS201", "CS101"]
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 6, "totalPages": 1}


def test_rows_use_camel_case_and_embed_department(client, seeded):
    r = client.get("/api/v1/subjects", params={"search": "CS201"})
    row = r.json()["data"][0]
    assert set(row) == {
        "id", "departmentId", "name", "code", "description",
        "createdAt", "updatedAt", "department",
    }
    assert row["department"]["code"] == "CS"
    assert row["department"]["name"] == "Computer Science"
    assert row["departmentId"] == row["department"]["id"]


def test_missing_department_is_null(client, seeded):
    r = client.get("/api/v1/subjects", params={"search": "orphaned"})
    data = r.json()["data"]
    assert len(data) == 1
    assert data[0]["department"] is None


def test_search_matches_name_or_code_case_insensitive(client, seeded):
    r = client.get("/api/v1/subjects", params={"search": "PROGRAMMING"})
    assert _codes(r.json()) == ["MATH150", "CS301", "CS101"]
    r = client.get("/api/v1/subjects", params={"search": "math1"})
    assert sorted(_codes(r.json())) == ["MATH101", "MATH150"]


def test_department_filter_matches_department_name(client, seeded):
    r = client.get("/api/v1/subjects", params={"department": "computer"})
    assert _codes(r.json()) == ["CS301", "CS201", "CS101"]


def test_search_and_department_combine_with_and(client, seeded):
    r = client.get(
        "/api/v1/subjects",
        params={"search": "Programming", "department": "Computer Science"},
    )
    body = r.json()
    assert _codes(body) == ["CS301", "CS101"]
    assert body["pagination"]["total"] == 2


def test_blank_filters_are_ignored(client, seeded):
    r = client.get("/api/v1/subjects", params={"search": "   ", "department": ""})
    assert r.json()["pagination"]["total"] == 6


def test_second_page(client, seeded):
    r = client.get("/api/v1/subjects", params={"page": "2", "pageSize": "4"})
    body = r.json()
    assert _codes(body) == ["CS201", "CS101"]
    assert body["pagination"] == {"page": 2, "limit": 4, "total": 6, "totalPages": 2}


def test_bad_pagination_is_corrected_not_rejected(client, seeded):
    r = client.get("/api/v1/subjects", params={"page": "abc", "pageSize": "-5"})
    assert r.status_code == 200
    assert r.json()["pagination"]["page"] == 1
    assert r.json()["pagination"]["limit"] == 10

    r = client.get("/api/v1/subjects", params={"page": "-3", "pageSize": "1000"})
    assert r.status_code == 200
    assert r.json()["pagination"]["page"] == 1
    assert r.json()["pagination"]["limit"] == 100


def test_page_past_the_end_is_empty(client, seeded):
    r = client.get("/api/v1/subjects", params={"page": "9"})
    body = r.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 6


def test_empty_table_has_zero_pages(client):
    r = client.get("/api/v1/subjects")
    assert r.status_code == 200
    assert r.json() == {
        "data": [],
        "pagination": {"page": 1, "limit": 10, "total": 0, "totalPages": 0},
    }


def test_query_failure_returns_opaque_500(client, seeded, monkeypatch):
    def boom(self, params):
        raise RuntimeError("connection refused")

    monkeypatch.setattr(SubjectRepository, "count", boom)
    r = client.get("/api/v1/subjects")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to get subjects"}


def test_page_query_failure_returns_opaque_500(client, seeded, monkeypatch):
    def boom(self, params):
        raise RuntimeError("bad filter")

    monkeypatch.setattr(SubjectRepository, "list_page", boom)
    r = client.get("/api/v1/subjects", params={"search": "x"})
    assert r.status_code == 500
    assert "data" not in r.json()


def test_request_id_is_echoed(client):
    r = client.get("/", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"
    assert client.get("/").headers["X-Request-ID"]


def test_overlong_page_is_corrected(client, seeded):
    r = client.get("/api/v1/subjects", params={"page": "1" * 5000})
    assert r.status_code == 200
    assert r.json()["pagination"]["page"] == 1
