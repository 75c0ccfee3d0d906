"""Тесты API: права на задачи, список пользователей, служебные ответы."""

from datetime import timedelta

from synergysphere.core.repositories import TaskRepository, UserRepository
from synergysphere.dependencies import get_task_repository, get_user_repository
from synergysphere.exceptions import PersistenceError
from synergysphere.utils.datetime_utils import utcnow


class BrokenTaskRepository(TaskRepository):
    async def get(self, task_id):
        raise PersistenceError("connection reset")

    async def find_due_between(self, start, end, assignee_id=None):
        raise PersistenceError("connection reset")


class BrokenUserRepository(UserRepository):
    async def get(self, user_id):
        raise PersistenceError("connection reset")

    async def list_summaries(self):
        raise PersistenceError("connection reset")


# ===== /api/projects/{id}/tasks/{taskId}/permissions =====

async def test_creator_can_delete(client, login, alice, project_id, task):
    headers = await login(alice)

    response = await client.get(f"/api/projects/{project_id}/tasks/{task.id}/permissions", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"canDelete": True}


async def test_non_creator_cannot_delete(client, login, bob, project_id, task):
    headers = await login(bob)

    response = await client.get(f"/api/projects/{project_id}/tasks/{task.id}/permissions", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"canDelete": False}


async def test_permissions_require_session(client):
    response = await client.get("/api/projects/p1/tasks/t1/permissions")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_expired_session_is_unauthorized(client, login, alice):
    headers = await login(alice, expires_in=-timedelta(seconds=1))

    response = await client.get("/api/projects/p1/tasks/t1/permissions", headers=headers)

    assert response.status_code == 401


async def test_unknown_task_is_not_deletable(client, login, alice):
    headers = await login(alice)

    response = await client.get("/api/projects/p1/tasks/missing/permissions", headers=headers)

    assert response.status_code == 200
    assert response.json() == {"canDelete": False}


async def test_storage_failure_is_500_not_false(app, client, login, alice):
    headers = await login(alice)
    app.dependency_overrides[get_task_repository] = lambda: BrokenTaskRepository()

    response = await client.get("/api/projects/p1/tasks/t1/permissions", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to check permissions"}


async def test_cookie_session_is_accepted(client, session_repo, alice, project_id, task):
    await session_repo.create(alice.id, "cookie-token", utcnow() + timedelta(hours=1))
    headers = {"Cookie": "better-auth.session_token=cookie-token.signature"}

    response = await client.get(f"/api/projects/{project_id}/tasks/{task.id}/permissions", headers=headers)

    assert response.json() == {"canDelete": True}


# ===== /api/users =====

async def test_users_require_session(client):
    response = await client.get("/api/users")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_users_list(client, login, alice, bob):
    headers = await login(alice)

    response = await client.get("/api/users", headers=headers)

    assert response.status_code == 200
    body = sorted(response.json(), key=lambda u: u["id"])
    assert body == [
        {"id": "user-alice", "name": "Alice", "email": "alice@example.com"},
        {"id": "user-bob", "name": "Bob", "email": "bob@example.com"},
    ]


async def test_users_failure(app, client, login, alice):
    headers = await login(alice)
    app.dependency_overrides[get_user_repository] = lambda: BrokenUserRepository()

    response = await client.get("/api/users", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch users"}


# ===== служебные =====

async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Process-Time" in response.headers


async def test_unknown_route_uses_error_shape(client):
    response = await client.get("/api/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
