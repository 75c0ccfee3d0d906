#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Dependencies
Провайдеры зависимостей для FastAPI приложения.

Все компоненты создаются в create_app() и хранятся в app.state;
обработчики получают их только через Depends.
"""

import logging
import time

from fastapi import Depends, Request

from synergysphere.config import Settings
from synergysphere.core.database import Database
from synergysphere.core.repositories import (
    NotificationRepository, ProjectMemberRepository, SqlNotificationRepository,
    SqlProjectMemberRepository, SqlTaskRepository, SqlUserRepository,
    TaskRepository, UserRepository
)
from synergysphere.exceptions import AuthenticationMissing
from synergysphere.models import Actor
from synergysphere.services import (
    AuthorizationService, DeadlineNotifier, NotificationService, SessionProvider
)

logger = logging.getLogger(__name__)

# ===== КОМПОНЕНТЫ ПРИЛОЖЕНИЯ =====

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_provider(request: Request) -> SessionProvider:
    return request.app.state.session_provider

# ===== РЕПОЗИТОРИИ =====

def get_task_repository(database: Database = Depends(get_database)) -> TaskRepository:
    return SqlTaskRepository(database)


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return SqlUserRepository(database)


def get_notification_repository(database: Database = Depends(get_database)) -> NotificationRepository:
    return SqlNotificationRepository(database)


def get_member_repository(database: Database = Depends(get_database)) -> ProjectMemberRepository:
    return SqlProjectMemberRepository(database)

# ===== СЕРВИСЫ =====

def get_authorization_service(
    tasks: TaskRepository = Depends(get_task_repository),
    members: ProjectMemberRepository = Depends(get_member_repository)
) -> AuthorizationService:
    return AuthorizationService(tasks, members)


def get_notification_service(
    repository: NotificationRepository = Depends(get_notification_repository),
    settings: Settings = Depends(get_settings)
) -> NotificationService:
    return NotificationService(repository, default_limit=settings.NOTIFICATIONS_LIMIT)


def get_deadline_notifier(
    tasks: TaskRepository = Depends(get_task_repository),
    notifications: NotificationService = Depends(get_notification_service)
) -> DeadlineNotifier:
    return DeadlineNotifier(tasks, notifications)

# ===== АВТОРИЗАЦИЯ =====

async def get_current_actor(
    request: Request,
    provider: SessionProvider = Depends(get_session_provider)
) -> Actor:
    """Пользователь текущего запроса.

    Зависимость разрешается раньше разбора query и тела запроса,
    поэтому запрос без сессии всегда получает 401.

    Raises:
        AuthenticationMissing: сессии нет или она истекла.
        PersistenceError: сбой хранилища сессий.
    """
    session = await provider.get_session(request.headers)
    if session is None:
        raise AuthenticationMissing("Unauthorized")
    return session.user

# ===== УТИЛИТЫ =====

def get_client_ip(request: Request) -> str:
    """Получить IP адрес клиента"""
    # Проверяем заголовки прокси
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"


def log_request(request: Request, started: float, status_code: int) -> float:
    """Логирование запроса, возвращает время обработки"""
    process_time = time.time() - started
    logger.info(
        f"{request.method} {request.url.path} "
        f"- {status_code} - {process_time:.3f}s "
        f"- {get_client_ip(request)}"
    )
    return process_time
