"""Общие фикстуры: свежая SQLite БД на каждый тест, репозитории, API клиент."""

import secrets
from datetime import timedelta

import httpx
import pytest

from synergysphere.app import create_app
from synergysphere.config import Settings
from synergysphere.core.database import Database
from synergysphere.core.repositories import (
    SqlNotificationRepository, SqlProjectMemberRepository, SqlProjectRepository,
    SqlSessionRepository, SqlTaskRepository, SqlUserRepository
)
from synergysphere.utils.datetime_utils import utcnow


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        ENVIRONMENT="testing",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        CREATE_TABLES=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def database(settings):
    db = Database.from_settings(settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def users(database) -> SqlUserRepository:
    return SqlUserRepository(database)


@pytest.fixture
def tasks(database) -> SqlTaskRepository:
    return SqlTaskRepository(database)


@pytest.fixture
def projects(database) -> SqlProjectRepository:
    return SqlProjectRepository(database)


@pytest.fixture
def members(database) -> SqlProjectMemberRepository:
    return SqlProjectMemberRepository(database)


@pytest.fixture
def notification_repo(database) -> SqlNotificationRepository:
    return SqlNotificationRepository(database)


@pytest.fixture
def session_repo(database) -> SqlSessionRepository:
    return SqlSessionRepository(database)


@pytest.fixture
async def alice(users):
    return await users.create("Alice", "alice@example.com", user_id="user-alice")


@pytest.fixture
async def bob(users):
    return await users.create("Bob", "bob@example.com", user_id="user-bob")


@pytest.fixture
async def project_id(projects, alice):
    return await projects.create("Apollo", created_by_id=alice.id)


@pytest.fixture
async def task(tasks, project_id, alice):
    return await tasks.create("Write launch plan", project_id=project_id, created_by_id=alice.id)


@pytest.fixture
def login(session_repo):
    """Создает сессию и возвращает заголовки авторизации"""
    async def _login(user, expires_in: timedelta = timedelta(days=7)):
        token = secrets.token_urlsafe(24)
        await session_repo.create(user.id, token, utcnow() + expires_in)
        return {"Authorization": f"Bearer {token}"}
    return _login


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http
