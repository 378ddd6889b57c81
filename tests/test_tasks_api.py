from datetime import datetime, timezone

import redis


def test_list_is_empty_without_tasks(client):
    response = client.get("/tasks")
    assert response.status_code == 200
    assert response.json() == []


def test_list_returns_only_active_tasks(client, store):
    active = store.create({"title": "Active Task", "color": "BLUE"})
    store.create({"title": "Deleted Task", "color": "RED", "deleted": datetime.now(timezone.utc)})

    response = client.get("/tasks")
    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    assert body[0]["id"] == active["id"]
    assert body[0]["title"] == "Active Task"


def test_create_with_title_only(client):
    response = client.post("/tasks", json={"title": "Test Task"})
    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Test Task"
    assert body["id"]
    assert body["color"] is None
    assert body["completed"] is None
    assert body["deleted"] is None


def test_create_with_all_optional_fields(client):
    response = client.post("/tasks", json={
        "title": "Complete Task",
        "color": "GREEN",
        "completed": "2024-05-01T12:00:00Z",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["color"] == "GREEN"
    assert body["completed"] is not None


def test_create_appears_in_list(client):
    created = client.post("/tasks", json={"title": "Listed"}).json()
    ids = [t["id"] for t in client.get("/tasks").json()]
    assert ids == [created["id"]]


def test_create_without_title(client):
    response = client.post("/tasks", json={"color": "RED"})
    assert response.status_code == 400
    assert response.text == "Title is required"


def test_create_with_empty_body(client):
    response = client.post("/tasks", json={})
    assert response.status_code == 400


def test_create_with_invalid_color(client):
    response = client.post("/tasks", json={"title": "Task with invalid color", "color": "INVALID_COLOR"})
    assert response.status_code == 400
    assert response.text == "Invalid color value"
    assert client.get("/tasks").json() == []


def test_create_with_malformed_json(client):
    response = client.post(
        "/tasks",
        content="invalid json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.text == "Malformed JSON body"


def test_create_with_bad_completed_value(client):
    response = client.post("/tasks", json={"title": "T", "completed": "not a date"})
    assert response.status_code == 400


def test_upsert_creates_with_given_id(client):
    response = client.put("/tasks/non-existent-id", json={"title": "New Task", "color": "PURPLE"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "non-existent-id"
    assert body["title"] == "New Task"
    assert body["color"] == "PURPLE"
    assert body["deleted"] is None


def test_upsert_updates_existing(client, store):
    existing = store.create({"title": "Original Title", "color": "BLUE"})
    response = client.put(f"/tasks/{existing['id']}", json={"title": "Updated Title", "color": "RED"})
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == existing["id"]
    assert body["title"] == "Updated Title"
    assert body["color"] == "RED"


def test_upsert_restores_soft_deleted(client, store):
    deleted = store.create({"title": "Deleted Task", "deleted": datetime.now(timezone.utc)})
    response = client.put(f"/tasks/{deleted['id']}", json={"title": "Restored Task"})
    assert response.status_code == 200
    assert response.json()["title"] == "Restored Task"
    assert response.json()["deleted"] is None
    assert [t["id"] for t in client.get("/tasks").json()] == [deleted["id"]]


def test_upsert_without_title(client):
    response = client.put("/tasks/some-id", json={"color": "BLUE"})
    assert response.status_code == 400
    assert response.text == "Title is required"


def test_upsert_with_invalid_color(client, store):
    existing = store.create({"title": "Keep", "color": "BLUE"})
    response = client.put(f"/tasks/{existing['id']}", json={"title": "Keep", "color": "TEAL"})
    assert response.status_code == 400
    assert response.text == "Invalid color value"
    assert store.find_unique(existing["id"])["color"] == "BLUE"


def test_delete_soft_deletes(client, store):
    task = store.create({"title": "Task to Delete", "color": "ORANGE"})

    response = client.delete(f"/tasks/{task['id']}")
    assert response.status_code == 204
    assert response.content == b""

    assert store.find_unique(task["id"])["deleted"] is not None
    assert client.get("/tasks").json() == []

    again = client.delete(f"/tasks/{task['id']}")
    assert again.status_code == 404
    assert again.text == "Task not found"


def test_delete_missing_task(client):
    response = client.delete("/tasks/non-existent-id")
    assert response.status_code == 404
    assert response.text == "Task not found"


def test_delete_already_deleted_task(client, store):
    task = store.create({"title": "Already Deleted", "deleted": datetime.now(timezone.utc)})
    response = client.delete(f"/tasks/{task['id']}")
    assert response.status_code == 404
    assert response.text == "Task not found"


def test_health_check(client):
    response = client.get("/health-check")
    assert response.status_code == 200
    assert response.text == "OK"


def test_cors_allows_configured_origin(client):
    response = client.get("/tasks", headers={"Origin": "http://localhost:3000"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_store_failure_maps_to_500(client, store, monkeypatch):
    def unavailable(**where):
        raise redis.ConnectionError("connection refused")

    monkeypatch.setattr(store, "find_many", unavailable)
    response = client.get("/tasks")
    assert response.status_code == 500
    assert response.text == "Task store unavailable"


def test_create_with_non_string_color(client):
    response = client.post("/tasks", json={"title": "T", "color": 5})
    assert response.status_code == 400
    assert response.text == "Invalid color value"


def test_upsert_with_non_string_color(client):
    response = client.put("/tasks/x", json={"title": "T", "color": ["RED"]})
    assert response.status_code == 400
    assert response.text == "Invalid color value"
    assert client.get("/tasks").json() == []


def test_upsert_body_without_fields_keeps_them(client):
    client.put("/tasks/keep", json={"title": "A", "color": "BLUE", "completed": "2024-05-01T12:00:00Z"})

    body = client.put("/tasks/keep", json={"title": "B"}).json()
    assert body["title"] == "B"
    assert body["color"] == "BLUE"
    assert body["completed"] is not None


def test_upsert_body_with_nulls_clears_fields(client):
    client.put("/tasks/clear", json={"title": "A", "color": "BLUE", "completed": "2024-05-01T12:00:00Z"})

    body = client.put("/tasks/clear", json={"title": "A", "color": None, "completed": None}).json()
    assert body["color"] is None
    assert body["completed"] is None
