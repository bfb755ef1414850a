"""
Tests for diary, tag, image, stats and export endpoints.
"""
from journal.models.diary import DiaryEntry


def _diary(**overrides):
    body = {
        "title": "First day",
        "content": "It rained all day.",
        "weather": "Rainy",
        "mood": "calm",
        "date": "2024-03-01",
        "tags": ["rain", "home"],
    }
    body.update(overrides)
    return body


def _create(client, headers, **overrides):
    response = client.post("/api/diaries", json=_diary(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_diary(client, auth_headers, db_session):
    created = _create(client, auth_headers)
    assert created["title"] == "First day"
    assert created["content"] == "It rained all day."
    assert created["summary"] == "It rained all day."
    assert sorted(t["name"] for t in created["tags"]) == ["home", "rain"]

    stored = db_session.get(DiaryEntry, created["id"])
    assert stored.title != "First day"

    response = client.get(f"/api/diaries/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["weather"] == "Rainy"


def test_get_missing_diary(client, auth_headers):
    assert client.get("/api/diaries/999", headers=auth_headers).status_code == 404


def test_private_diary_hidden_from_others(client, auth_headers, login_as):
    created = _create(client, auth_headers)
    public = _create(client, auth_headers, title="Open", is_public=True)
    bob = login_as("bob", "bobpassword456")

    assert client.get(f"/api/diaries/{created['id']}", headers=bob).status_code == 403
    assert client.get(f"/api/diaries/{public['id']}", headers=bob).status_code == 200
    assert client.put(f"/api/diaries/{public['id']}", json=_diary(), headers=bob).status_code == 403
    assert client.delete(f"/api/diaries/{public['id']}", headers=bob).status_code == 403


def test_update_diary(client, auth_headers):
    created = _create(client, auth_headers)
    response = client.put(
        f"/api/diaries/{created['id']}",
        json=_diary(title="Edited", tags=["home", "books"]),
        headers=auth_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Edited"
    assert sorted(t["name"] for t in body["tags"]) == ["books", "home"]


def test_delete_diary(client, auth_headers):
    created = _create(client, auth_headers)
    assert client.delete(f"/api/diaries/{created['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/diaries/{created['id']}", headers=auth_headers).status_code == 404


def test_list_and_public_feed(client, auth_headers):
    _create(client, auth_headers, title="mine")
    _create(client, auth_headers, title="shared", is_public=True)

    response = client.get("/api/diaries?page=1&page_size=10", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = client.get("/api/diaries/public", headers=auth_headers)
    body = response.json()
    assert body["total"] == 1
    assert body["diaries"][0]["title"] == "shared"
    assert body["diaries"][0]["content"] is None
    assert body["diaries"][0]["summary"] == "It rained all day."


def test_search_requires_keyword(client, auth_headers):
    assert client.get("/api/diaries/search?q=", headers=auth_headers).status_code == 400
    response = client.get("/api/diaries/search?q=nothing", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["total"] == 0


def test_pin_limit(client, auth_headers):
    ids = [_create(client, auth_headers, title=f"d{i}")["id"] for i in range(4)]
    for diary_id in ids[:3]:
        response = client.post(f"/api/diaries/{diary_id}/pin", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["is_pinned"] is True

    response = client.post(f"/api/diaries/{ids[3]}/pin", headers=auth_headers)
    assert response.status_code == 400

    listed = client.get("/api/diaries", headers=auth_headers).json()["diaries"]
    assert [d["is_pinned"] for d in listed] == [True, True, True, False]


def test_tags_endpoints(client, auth_headers):
    _create(client, auth_headers, tags=["rain"])
    _create(client, auth_headers, tags=["rain", "home"])

    popular = client.get("/api/tags/popular", headers=auth_headers).json()
    assert popular[0]["name"] == "rain"

    response = client.post("/api/tags", json={"name": "rain"}, headers=auth_headers)
    assert response.status_code == 409

    response = client.post("/api/tags", json={"name": "walk"}, headers=auth_headers)
    assert response.status_code == 201
    tag_id = response.json()["id"]

    response = client.put(f"/api/tags/{tag_id}", json={"name": "run"}, headers=auth_headers)
    assert response.json()["name"] == "run"
    assert client.delete(f"/api/tags/{tag_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/tags/{tag_id}", headers=auth_headers).status_code == 404
    assert client.get("/api/tags", headers=auth_headers).json()["total"] == 2


def test_image_upload_and_attach(client, auth_headers):
    response = client.post(
        "/api/images",
        files={"file": ("photo.png", b"\x89PNG fake", "image/png")},
        headers=auth_headers,
    )
    assert response.status_code == 201
    image = response.json()
    assert image["diary_id"] is None

    response = client.get("/api/images?unattached=true", headers=auth_headers)
    assert response.json()["total"] == 1

    created = _create(client, auth_headers)
    response = client.post(
        f"/api/images/{image['id']}/attach", json={"diary_id": created["id"]}, headers=auth_headers
    )
    assert response.json()["diary_id"] == created["id"]
    diary = client.get(f"/api/diaries/{created['id']}", headers=auth_headers).json()
    assert [img["id"] for img in diary["images"]] == [image["id"]]

    response = client.post(f"/api/images/{image['id']}/detach", headers=auth_headers)
    assert response.json()["diary_id"] is None


def test_image_upload_rejects_type(client, auth_headers):
    response = client.post(
        "/api/images",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_dashboard_stats(client, auth_headers):
    _create(client, auth_headers, mood="calm", tags=["rain"])
    _create(client, auth_headers, mood="calm", date="2024-04-02", tags=["rain", "home"])
    _create(client, auth_headers, mood="", date="2024-04-03", tags=[])

    response = client.get("/api/stats/dashboard", headers=auth_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["diary_count"] == 3
    assert stats["mood_stats"] == {"calm": 2, "unknown": 1}
    assert stats["top_tags"][0] == {"tag": "rain", "count": 2}
    assert stats["monthly_trend"] == [
        {"month": "2024-03", "count": 1},
        {"month": "2024-04", "count": 2},
    ]
    assert stats["todo_completed_rate"] == 0.0


def test_export(client, auth_headers):
    first = _create(client, auth_headers, date="2024-01-05")
    _create(client, auth_headers, date="2024-02-05")

    response = client.post("/api/export", json={"type": "all"}, headers=auth_headers)
    assert response.json()["count"] == 2

    response = client.post("/api/export", json={"type": "selected", "diary_ids": [first["id"]]}, headers=auth_headers)
    body = response.json()
    assert body["count"] == 1
    assert body["diaries"][0]["content"] == "It rained all day."

    response = client.post(
        "/api/export",
        json={"type": "date_range", "start_date": "2024-02-01", "end_date": "2024-02-28"},
        headers=auth_headers,
    )
    assert response.json()["count"] == 1

    response = client.post("/api/export", json={"type": "date_range"}, headers=auth_headers)
    assert response.status_code == 422


def test_list_by_tag(client, auth_headers):
    _create(client, auth_headers, title="wet", tags=["rain"])
    _create(client, auth_headers, title="dry", tags=["sun"])

    body = client.get("/api/diaries?tag=rain", headers=auth_headers).json()
    assert body["total"] == 1
    assert body["diaries"][0]["title"] == "wet"
    assert client.get("/api/diaries?tag=missing", headers=auth_headers).json()["total"] == 0


def test_images_by_diary(client, auth_headers, login_as):
    created = _create(client, auth_headers)
    image = client.post(
        "/api/images",
        files={"file": ("photo.jpg", b"\xff\xd8 fake", "image/jpeg")},
        headers=auth_headers,
    ).json()
    client.post(f"/api/images/{image['id']}/attach", json={"diary_id": created["id"]}, headers=auth_headers)

    response = client.get(f"/api/images/by-diary/{created['id']}", headers=auth_headers)
    assert [img["id"] for img in response.json()] == [image["id"]]

    bob = login_as("bob", "bobpassword456")
    assert client.get(f"/api/images/by-diary/{created['id']}", headers=bob).status_code == 403


def test_export_single_diary(client, auth_headers, login_as):
    created = _create(client, auth_headers, is_public=True)

    response = client.get(f"/api/diaries/{created['id']}/export", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["diaries"][0]["content"] == "It rained all day."
    assert body["diaries"][0]["weather"] == "Rainy"

    bob = login_as("bob", "bobpassword456")
    assert client.get(f"/api/diaries/{created['id']}/export", headers=bob).status_code == 403
    assert client.get("/api/diaries/999/export", headers=auth_headers).status_code == 404
