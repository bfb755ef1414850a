"""
Tests for todo endpoints.
"""


def test_todo_lifecycle(client, auth_headers):
    response = client.post("/api/todos", json={"title": "Buy notebook"}, headers=auth_headers)
    assert response.status_code == 201
    todo = response.json()
    assert todo["done"] is False

    response = client.post(f"/api/todos/{todo['id']}/done", headers=auth_headers)
    assert response.json()["done"] is True

    response = client.put(
        f"/api/todos/{todo['id']}",
        json={"title": "Buy two notebooks", "description": "A5"},
        headers=auth_headers,
    )
    assert response.json()["title"] == "Buy two notebooks"
    assert response.json()["done"] is True

    response = client.post(f"/api/todos/{todo['id']}/undone", headers=auth_headers)
    assert response.json()["done"] is False

    assert client.delete(f"/api/todos/{todo['id']}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/todos/{todo['id']}", headers=auth_headers).status_code == 404


def test_todo_filters_and_stats(client, auth_headers):
    ids = [
        client.post("/api/todos", json={"title": f"task {i}"}, headers=auth_headers).json()["id"]
        for i in range(4)
    ]
    client.post(f"/api/todos/{ids[0]}/done", headers=auth_headers)

    assert client.get("/api/todos?done=true", headers=auth_headers).json()["total"] == 1
    assert client.get("/api/todos?done=false", headers=auth_headers).json()["total"] == 3
    assert client.get("/api/todos/stats", headers=auth_headers).json() == {"total": 4, "pending": 3}

    stats = client.get("/api/stats/dashboard", headers=auth_headers).json()
    assert stats["todo_completed_rate"] == 0.25


def test_todo_belongs_to_owner(client, auth_headers, login_as):
    todo = client.post("/api/todos", json={"title": "private"}, headers=auth_headers).json()
    bob = login_as("bob", "bobpassword456")
    assert client.get(f"/api/todos/{todo['id']}", headers=bob).status_code == 403


def test_todos_due_in_range(client, auth_headers):
    for title, due in [("late", "2024-06-30T09:00:00"), ("early", "2024-06-01T09:00:00"), ("out", "2024-08-01T09:00:00")]:
        client.post("/api/todos", json={"title": title, "due_date": due}, headers=auth_headers)
    client.post("/api/todos", json={"title": "no due date"}, headers=auth_headers)

    response = client.get(
        "/api/todos/due?start=2024-06-01T00:00:00&end=2024-06-30T23:59:59", headers=auth_headers
    )
    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["early", "late"]
