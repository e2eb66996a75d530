"""
Tests for the REST endpoints (apps/core/views.py, apps/board/views.py)
and the JSON error mapping in apps/core/middleware.py.
"""

import json

import pytest
from django.test import RequestFactory

from apps.core.choices import TaskStatus
from apps.core.models import Task, User
from apps.core.views import server_error

pytestmark = pytest.mark.django_db

JSON = "application/json"


def assert_error(response, status, error):
    body = response.json()
    assert response.status_code == status
    assert body["status"] == status
    assert body["error"] == error
    assert body["message"]
    assert "timestamp" in body


class TestAuthEndpoints:

    def test_register(self, client):
        response = client.post(
            "/api/auth/register",
            {"name": "Dana", "email": "dana@example.com", "password": "long-enough"},
            content_type=JSON,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "Dana"
        assert body["token"]

    def test_register_duplicate_is_409(self, client, user):
        response = client.post(
            "/api/auth/register",
            {"name": "Again", "email": user.email, "password": "long-enough"},
            content_type=JSON,
        )

        assert_error(response, 409, "Conflict")
        assert User.objects.filter(email=user.email).count() == 1

    def test_register_missing_fields_is_400(self, client):
        response = client.post("/api/auth/register", {"email": "x@example.com"}, content_type=JSON)

        assert_error(response, 400, "Bad Request")

    def test_login(self, client, user):
        response = client.post(
            "/api/auth/login",
            {"email": "alice@example.com", "password": "s3cret-pass"},
            content_type=JSON,
        )

        assert response.status_code == 200
        assert response.json()["username"] == "Alice"

    def test_login_wrong_password_is_401(self, client, user):
        response = client.post(
            "/api/auth/login",
            {"email": "alice@example.com", "password": "nope-nope"},
            content_type=JSON,
        )

        assert_error(response, 401, "Unauthorized")

    def test_malformed_json_is_400(self, client):
        response = client.post("/api/auth/login", "{not json", content_type=JSON)

        assert_error(response, 400, "Bad Request")

    def test_get_not_allowed(self, client):
        response = client.get("/api/auth/login")

        assert_error(response, 405, "Method Not Allowed")
        assert response["Allow"] == "POST"

    def test_token_from_register_works_on_tasks(self, client):
        token = client.post(
            "/api/auth/register",
            {"name": "Dana", "email": "dana@example.com", "password": "long-enough"},
            content_type=JSON,
        ).json()["token"]

        response = client.get("/api/tasks", HTTP_AUTHORIZATION=f"Bearer {token}")

        assert response.status_code == 200
        assert response.json() == []


class TestAuthenticationRequired:

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/tasks"),
            ("post", "/api/tasks"),
            ("put", "/api/tasks/1"),
            ("delete", "/api/tasks/1"),
            ("post", "/api/tasks/1/move"),
        ],
    )
    def test_missing_token_is_401(self, client, method, path):
        response = getattr(client, method)(path, content_type=JSON)

        assert_error(response, 401, "Unauthorized")

    def test_invalid_token_is_401(self, client):
        response = client.get("/api/tasks", HTTP_AUTHORIZATION="Bearer forged.token.value")

        assert_error(response, 401, "Unauthorized")

    def test_token_of_deleted_user_is_404(self, api_client, user):
        User.objects.filter(pk=user.pk).update(deleted=True)

        assert_error(api_client.get("/api/tasks"), 404, "Not Found")


class TestTaskCollection:

    def test_list_only_own_tasks_in_order(self, api_client, user, other_user, make_task):
        make_task("second", order=2000.0, status=TaskStatus.DONE)
        make_task("first", order=1000.0, description="details")
        make_task("foreign", order=1500.0, owner=other_user)

        response = api_client.get("/api/tasks")

        assert response.status_code == 200
        body = response.json()
        assert [t["title"] for t in body] == ["first", "second"]
        assert body[0]["description"] == "details"
        assert body[0]["creatorName"] == "Alice"
        assert body[1]["status"] == "DONE"
        assert set(body[0]) == {
            "id", "title", "description", "status", "order", "creatorName", "createdAt"
        }

    def test_invalid_stored_status_listed_as_todo(self, api_client, make_task):
        make_task("legacy", status="ARCHIVED")

        assert api_client.get("/api/tasks").json()[0]["status"] == "TODO"

    def test_create(self, api_client, user):
        response = api_client.post(
            "/api/tasks", {"title": "New card", "description": "body"}, content_type=JSON
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "New card"
        assert body["status"] == "TODO"
        assert body["creatorName"] == "Alice"
        assert Task.objects.get(pk=body["id"]).owner_id == user.pk

    def test_create_ignores_owner_and_status_in_body(self, api_client, user, other_user):
        response = api_client.post(
            "/api/tasks",
            {"title": "Sneaky", "status": "DONE", "owner": other_user.pk},
            content_type=JSON,
        )

        task = Task.objects.get(pk=response.json()["id"])
        assert task.owner_id == user.pk
        assert task.status == TaskStatus.TODO

    def test_create_without_title_is_400(self, api_client):
        response = api_client.post("/api/tasks", {"description": "no title"}, content_type=JSON)

        assert_error(response, 400, "Bad Request")
        assert not Task.objects.exists()

    def test_create_with_non_object_body_is_400(self, api_client):
        response = api_client.post("/api/tasks", "[1, 2]", content_type=JSON)

        assert_error(response, 400, "Bad Request")


class TestTaskDetail:

    def test_partial_update(self, api_client, make_task):
        task = make_task("Card", order=1000.0, description="keep")

        response = api_client.put(
            f"/api/tasks/{task.pk}", {"status": "IN_PROGRESS", "order": 1500.5}, content_type=JSON
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "IN_PROGRESS"
        assert body["order"] == 1500.5
        assert body["title"] == "Card"
        assert body["description"] == "keep"

    def test_update_unknown_status_becomes_todo(self, api_client, make_task):
        task = make_task(status=TaskStatus.DONE)

        response = api_client.put(f"/api/tasks/{task.pk}", {"status": "LATER"}, content_type=JSON)

        assert response.json()["status"] == "TODO"

    @pytest.mark.parametrize("order", ["first", True, [1]])
    def test_update_non_numeric_order_is_400(self, api_client, make_task, order):
        task = make_task()

        response = api_client.put(f"/api/tasks/{task.pk}", {"order": order}, content_type=JSON)

        assert_error(response, 400, "Bad Request")

    def test_update_other_users_task_is_403(self, other_client, make_task):
        task = make_task("Mine")

        response = other_client.put(f"/api/tasks/{task.pk}", {"title": "Theirs"}, content_type=JSON)

        assert_error(response, 403, "Forbidden")
        task.refresh_from_db()
        assert task.title == "Mine"

    def test_update_missing_task_is_404(self, api_client):
        response = api_client.put("/api/tasks/999999", {"title": "x"}, content_type=JSON)

        assert_error(response, 404, "Not Found")

    def test_delete(self, api_client, make_task):
        task = make_task()

        response = api_client.delete(f"/api/tasks/{task.pk}")

        assert response.status_code == 200
        assert response.content == b""
        assert not Task.objects.filter(pk=task.pk).exists()

    def test_delete_twice_is_404(self, api_client, make_task):
        task = make_task()
        api_client.delete(f"/api/tasks/{task.pk}")

        assert_error(api_client.delete(f"/api/tasks/{task.pk}"), 404, "Not Found")

    def test_delete_other_users_task_is_403(self, other_client, make_task):
        task = make_task()

        assert_error(other_client.delete(f"/api/tasks/{task.pk}"), 403, "Forbidden")
        assert Task.objects.filter(pk=task.pk).exists()

    def test_get_not_allowed(self, api_client, make_task):
        task = make_task()

        response = api_client.get(f"/api/tasks/{task.pk}")

        assert_error(response, 405, "Method Not Allowed")
        assert set(response["Allow"].split(", ")) == {"PUT", "DELETE"}


class TestMoveEndpoint:

    def test_move_between_neighbors(self, api_client, make_task):
        make_task("A", order=1000.0)
        b = make_task("B", order=3000.0)
        card = make_task("C", order=10.0, status=TaskStatus.DONE)

        response = api_client.post(
            f"/api/tasks/{card.pk}/move", {"status": "TODO", "beforeId": b.pk}, content_type=JSON
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "TODO"
        assert body["order"] == 2000.0

    def test_move_to_end(self, api_client, make_task):
        make_task("A", order=1000.0, status=TaskStatus.DONE)
        card = make_task("C", order=10.0)

        response = api_client.post(
            f"/api/tasks/{card.pk}/move", {"status": "DONE", "beforeId": None}, content_type=JSON
        )

        assert response.json()["order"] == 2000.0

    def test_status_required(self, api_client, make_task):
        card = make_task()

        response = api_client.post(f"/api/tasks/{card.pk}/move", {}, content_type=JSON)

        assert_error(response, 400, "Bad Request")

    def test_unknown_neighbor_is_400(self, api_client, make_task):
        card = make_task()

        response = api_client.post(
            f"/api/tasks/{card.pk}/move", {"status": "TODO", "beforeId": 999999}, content_type=JSON
        )

        assert_error(response, 400, "Bad Request")

    def test_other_users_task_is_403(self, other_client, make_task):
        card = make_task()

        response = other_client.post(
            f"/api/tasks/{card.pk}/move", {"status": "DONE"}, content_type=JSON
        )

        assert_error(response, 403, "Forbidden")


class TestHealthCheck:

    def test_healthy(self, client):
        response = client.get("/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


def test_each_user_sees_only_own_board(api_client, other_client, other_user, make_task):
    make_task("alice card")
    make_task("bob card", owner=other_user)

    alice = api_client.get("/api/tasks").json()
    bob = other_client.get("/api/tasks").json()

    assert [t["title"] for t in alice] == ["alice card"]
    assert [t["title"] for t in bob] == ["bob card"]


class TestErrorShape:

    def test_wrong_method_on_move_is_json_405(self, api_client, make_task):
        task = make_task()

        response = api_client.get(f"/api/tasks/{task.pk}/move")

        assert_error(response, 405, "Method Not Allowed")

    def test_405_outside_api_is_left_alone(self, client):
        response = client.post("/health/")

        assert response.status_code == 405
        assert response["Content-Type"] != "application/json"

    def test_server_error_handler_answers_json(self):
        response = server_error(RequestFactory().get("/api/tasks"))

        assert response.status_code == 500
        body = json.loads(response.content)
        assert body["status"] == 500
        assert body["error"] == "Internal Server Error"
        assert body["timestamp"]


class TestOpenApi:

    @pytest.fixture
    def schema(self, client):
        response = client.get("/api/openapi.json")
        assert response.status_code == 200
        return response.json()

    def test_declares_bearer_scheme(self, schema):
        assert schema["openapi"].startswith("3.")
        assert schema["components"]["securitySchemes"]["bearerAuth"] == {
            "type": "http", "scheme": "bearer", "bearerFormat": "JWT"
        }

    def test_documents_every_route(self, schema):
        assert set(schema["paths"]) == {
            "/api/auth/register",
            "/api/auth/login",
            "/api/tasks",
            "/api/tasks/{id}",
            "/api/tasks/{id}/move",
        }
        assert set(schema["paths"]["/api/tasks/{id}"]) == {"parameters", "put", "delete"}

    def test_error_responses(self, schema):
        put = schema["paths"]["/api/tasks/{id}"]["put"]
        register = schema["paths"]["/api/auth/register"]["post"]

        assert {"400", "401", "403", "404"} <= set(put["responses"])
        assert "409" in register["responses"]
        assert put["security"] == [{"bearerAuth": []}]
        assert "security" not in register

    def test_status_enum_matches_board_columns(self, schema):
        assert schema["components"]["schemas"]["Status"]["enum"] == [s.value for s in TaskStatus]
