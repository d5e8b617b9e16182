from datetime import datetime, timezone


def create_page_payload(text="Test page", tags=None, due="2024-03-15T10:30:00+00:00", attachments=None):
    payload = {
        "text": text,
        "tags": ["work"] if tags is None else tags,
        "due": due,
    }
    if attachments is not None:
        payload["attachments"] = attachments
    return payload


def parse_dt(value: str) -> datetime:
    # pydantic serializes UTC as a trailing 'Z'
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def assert_page_shape(page: dict):
    for key in ["id", "text", "tags", "due", "attachments"]:
        assert key in page
    assert isinstance(page["id"], int)
    assert isinstance(page["text"], str)
    assert isinstance(page["tags"], list)
    parse_dt(page["due"])


def create(client, **kwargs) -> int:
    res = client.post("/page/", json=create_page_payload(**kwargs))
    assert res.status_code == 201
    return res.json()["id"]


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Healthy", "pages": 0}

    def test_health_check_counts_pages(self, client):
        create(client)
        create(client)
        assert client.get("/").json()["pages"] == 2


class TestPagesCRUD:
    def test_create_returns_id(self, client):
        res = client.post("/page/", json=create_page_payload())
        assert res.status_code == 201
        assert res.json() == {"id": 0}
        res2 = client.post("/page/", json=create_page_payload())
        assert res2.json() == {"id": 1}

    def test_create_and_get(self, client):
        attachments = [{"name": "a.txt", "url": "https://example.com/a.txt"}]
        pid = create(client, text="Read book", tags=["home", "books", "home"], attachments=attachments)

        res = client.get(f"/page/{pid}")
        assert res.status_code == 200
        page = res.json()
        assert_page_shape(page)
        assert page["id"] == pid
        assert page["text"] == "Read book"
        assert page["tags"] == ["home", "books", "home"]
        assert page["attachments"] == attachments
        assert parse_dt(page["due"]) == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    def test_create_with_date_only_due(self, client):
        pid = create(client, due="2099-12-25")
        page = client.get(f"/page/{pid}").json()
        assert page["due"].startswith("2099-12-25T00:00:00")

    def test_create_with_zulu_due(self, client):
        pid = create(client, due="2024-03-15T10:30:00Z")
        page = client.get(f"/page/{pid}").json()
        assert parse_dt(page["due"]) == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

    def test_create_without_tags_defaults_to_empty(self, client):
        res = client.post("/page/", json={"text": "bare", "due": "2024-01-01T00:00:00"})
        assert res.status_code == 201
        page = client.get(f"/page/{res.json()['id']}").json()
        assert page["tags"] == []
        assert page["attachments"] == []

    def test_get_not_found(self, client):
        res = client.get("/page/999")
        assert res.status_code == 404
        assert res.json()["detail"] == "page with id=999 not found"

    def test_get_all_pages(self, client):
        assert client.get("/page/").json() == []
        ids = {create(client, text=f"p{i}") for i in range(3)}
        res = client.get("/page/")
        assert res.status_code == 200
        assert {p["id"] for p in res.json()} == ids

    def test_put_replaces_page(self, client):
        pid = create(client, text="Initial", tags=["a", "b"])
        new_payload = {
            "id": pid,
            "text": "Replaced",
            "tags": ["c"],
            "due": "2100-01-01T08:00:00",
        }
        res = client.put("/page/", json=new_payload)
        assert res.status_code == 200
        updated = res.json()
        assert updated["id"] == pid
        assert updated["text"] == "Replaced"
        assert updated["tags"] == ["c"]
        assert updated["attachments"] == []
        assert updated["due"].startswith("2100-01-01T08:00:00")
        assert client.get(f"/page/{pid}").json() == updated

    def test_put_unknown_id_is_404_and_not_stored(self, client):
        res = client.put(
            "/page/",
            json={"id": 424242, "text": "ghost", "tags": [], "due": "2024-01-01T00:00:00"},
        )
        assert res.status_code == 404
        assert res.json()["detail"] == "page with id=424242 not found"
        assert client.get("/page/424242").status_code == 404
        assert client.get("/page/").json() == []

    def test_delete_page(self, client):
        pid = create(client)
        res = client.delete(f"/page/{pid}")
        assert res.status_code == 204
        assert res.text == ""

        assert client.get(f"/page/{pid}").status_code == 404
        res_again = client.delete(f"/page/{pid}")
        assert res_again.status_code == 404
        assert res_again.json()["detail"] == f"page with id={pid} not found"

    def test_delete_all_pages_keeps_id_sequence(self, client):
        ids = [create(client) for _ in range(3)]
        res = client.delete("/page/")
        assert res.status_code == 204
        assert client.get("/page/").json() == []
        assert create(client) > max(ids)


class TestQueries:
    def test_pages_by_tag(self, client):
        a = create(client, tags=["x", "y"])
        create(client, tags=["y"])
        c = create(client, tags=["x"])
        create(client, tags=["X"])

        res = client.get("/tag/x")
        assert res.status_code == 200
        assert sorted(p["id"] for p in res.json()) == [a, c]

    def test_pages_by_tag_no_match(self, client):
        create(client, tags=["x"])
        res = client.get("/tag/nothing")
        assert res.status_code == 200
        assert res.json() == []

    def test_pages_by_due(self, client):
        a = create(client, due="2024-03-15T00:00:00")
        b = create(client, due="2024-03-15T23:15:00")
        create(client, due="2024-03-16T00:00:00")

        res = client.get("/due/2024/3/15")
        assert res.status_code == 200
        assert sorted(p["id"] for p in res.json()) == [a, b]

    def test_pages_by_due_no_match(self, client):
        create(client, due="2024-03-15T00:00:00")
        assert client.get("/due/2025/1/1").json() == []

    def test_pages_by_due_rejects_bad_month(self, client):
        res = client.get("/due/2024/13/1")
        assert res.status_code == 422
        assert res.json()["error"] == "ValidationError"

    def test_pages_by_due_rejects_bad_day(self, client):
        assert client.get("/due/2024/1/0").status_code == 422
        assert client.get("/due/2024/1/32").status_code == 422

    def test_pages_by_due_rejects_non_numeric(self, client):
        assert client.get("/due/2024/march/1").status_code == 422


class TestValidationErrors:
    def test_create_rejects_unknown_fields(self, client):
        payload = create_page_payload()
        payload["color"] = "red"
        res = client.post("/page/", json=payload)
        assert res.status_code == 422
        body = res.json()
        assert body.get("error") == "ValidationError"
        assert body.get("message") == "Request validation failed"
        assert isinstance(body.get("detail"), list)

    def test_create_rejects_bad_due(self, client):
        res = client.post("/page/", json=create_page_payload(due="not-a-date"))
        assert res.status_code == 422
        assert res.json()["error"] == "ValidationError"

    def test_create_requires_due(self, client):
        res = client.post("/page/", json={"text": "no due"})
        assert res.status_code == 422

    def test_create_rejects_wrong_tag_type(self, client):
        res = client.post("/page/", json=create_page_payload(tags="work"))
        assert res.status_code == 422

    def test_put_requires_id(self, client):
        res = client.put("/page/", json=create_page_payload())
        assert res.status_code == 422

    def test_put_rejects_unknown_attachment_fields(self, client):
        pid = create(client)
        res = client.put(
            "/page/",
            json={
                "id": pid,
                "text": "t",
                "tags": [],
                "due": "2024-01-01T00:00:00",
                "attachments": [{"name": "n", "url": "u", "size": 3}],
            },
        )
        assert res.status_code == 422
