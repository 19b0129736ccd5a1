# tests/test_tasks_api.py

from __future__ import annotations

from datetime import date

from fastapi.testclient import TestClient

from taskmaster.main import app
from taskmaster.routes.tasks import get_task_service
from taskmaster.services.task_service import TaskStorageError


def _create(client: TestClient, **body) -> dict:
    body.setdefault("title", "Buy milk")
    resp = client.post("/api/tasks/save", json=body)
    assert resp.status_code == 201
    return resp.json()


def test_list_empty(client: TestClient) -> None:
    resp = client.get("/api/tasks")

    assert resp.status_code == 200
    assert resp.json() == []
    assert resp.headers["content-type"].startswith("application/json")


def test_save_without_date_uses_today(client: TestClient) -> None:
    resp = client.post(
        "/api/tasks/save",
        json={"title": "Buy milk", "description": "2%", "isCompleted": False},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert isinstance(body["id"], int)
    assert body["title"] == "Buy milk"
    assert body["description"] == "2%"
    assert body["createdDate"] == date.today().isoformat()
    assert body["isCompleted"] is False


def test_save_keeps_supplied_date(client: TestClient) -> None:
    body = _create(client, title="Tax return", createdDate="2024-04-15")

    assert body["createdDate"] == "2024-04-15"
    assert body["isCompleted"] is False


def test_list_returns_newest_first(client: TestClient) -> None:
    old = _create(client, title="old", createdDate="2023-01-01")
    new = _create(client, title="new", createdDate="2025-06-30")

    resp = client.get("/api/tasks")

    assert [t["id"] for t in resp.json()] == [new["id"], old["id"]]


def test_update_status(client: TestClient) -> None:
    task = _create(client)

    resp = client.post("/api/tasks/update", json={"id": task["id"], "is_completed": True})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Task updated successfully"}
    assert client.get("/api/tasks").json()[0]["isCompleted"] is True


def test_update_status_unknown_id(client: TestClient) -> None:
    resp = client.post("/api/tasks/update", json={"id": 999, "is_completed": True})

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Task not found"}


def test_delete_removes_task(client: TestClient) -> None:
    keep = _create(client, title="keep")
    drop = _create(client, title="drop")

    resp = client.post("/api/tasks/delete", json={"id": drop["id"]})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Task deleted successfully"}
    assert [t["id"] for t in client.get("/api/tasks").json()] == [keep["id"]]


def test_delete_unknown_id(client: TestClient) -> None:
    resp = client.post("/api/tasks/delete", json={"id": 12345})

    assert resp.status_code == 404
    assert resp.json()["success"] is False


def test_edit_merges_fields(client: TestClient) -> None:
    task = _create(client, title="draft", description="v1", createdDate="2024-01-10", isCompleted=True)

    resp = client.post("/api/tasks/edit", json={"id": task["id"], "title": "final", "description": "v2"})

    assert resp.status_code == 200
    assert resp.json() == {
        "id": task["id"],
        "title": "final",
        "description": "v2",
        "createdDate": "2024-01-10",
        "isCompleted": True,
    }


def test_edit_unknown_id(client: TestClient) -> None:
    resp = client.post("/api/tasks/edit", json={"id": 77, "title": "ghost"})

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Task not found"}


def test_wrong_method_is_405_json(client: TestClient) -> None:
    for method, path in (
        ("POST", "/api/tasks"),
        ("GET", "/api/tasks/save"),
        ("GET", "/api/tasks/update"),
        ("PUT", "/api/tasks/delete"),
    ):
        resp = client.request(method, path)
        assert resp.status_code == 405, (method, path)
        assert resp.json() == {"error": "Method not allowed"}


def test_every_response_has_cors_headers(client: TestClient) -> None:
    for resp in (
        client.get("/api/tasks"),
        client.post("/api/tasks/delete", json={"id": 1}),
        client.get("/api/tasks/save"),
    ):
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"
        assert resp.headers["access-control-allow-headers"] == "Content-Type"


def test_preflight_is_allowed(client: TestClient) -> None:
    resp = client.options(
        "/api/tasks/save",
        headers={
            "Origin": "http://localhost:8081",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"success": True, "message": "Preflight accepted"}
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"


def test_bare_options_is_405_json(client: TestClient) -> None:
    resp = client.options("/api/tasks/save")

    assert resp.status_code == 405
    assert resp.headers["content-type"].startswith("application/json")
    assert resp.json() == {"error": "Method not allowed"}


def test_missing_field_is_rejected(client: TestClient) -> None:
    resp = client.post("/api/tasks/update", json={"id": 1})

    assert resp.status_code == 422
    assert resp.json()["error"] == "Invalid request body"


def test_malformed_json_is_rejected(client: TestClient) -> None:
    resp = client.post(
        "/api/tasks/save",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 422


class _BrokenService:
    def get_all_tasks(self):
        raise TaskStorageError("list")

    def update_task_status(self, task_id, is_completed):
        raise TaskStorageError("status update")


def test_storage_fault_maps_to_500(client: TestClient) -> None:
    app.dependency_overrides[get_task_service] = _BrokenService

    listed = client.get("/api/tasks")
    updated = client.post("/api/tasks/update", json={"id": 1, "is_completed": True})

    for resp in (listed, updated):
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Storage error"}
        assert resp.headers["access-control-allow-origin"] == "*"


def test_health_reports_database(client: TestClient) -> None:
    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"
    assert body["service"] == "taskmaster-api"
