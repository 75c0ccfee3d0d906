#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - FastAPI Application
API командной работы: права на задачи, пользователи, уведомления

Версия: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from synergysphere.api import notifications, tasks, users
from synergysphere.config import Settings, get_settings
from synergysphere.core.database import Database
from synergysphere.core.repositories import (
    SqlNotificationRepository, SqlSessionRepository, SqlTaskRepository
)
from synergysphere.dependencies import log_request
from synergysphere.exceptions import AuthenticationMissing
from synergysphere.models.schemas import HealthCheck
from synergysphere.services import (
    DatabaseSessionProvider, DeadlineNotifier, DeadlineScheduler,
    NotificationService, SessionProvider
)
from synergysphere.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def build_deadline_scheduler(settings: Settings, database: Database) -> DeadlineScheduler:
    def notifier_factory() -> DeadlineNotifier:
        return DeadlineNotifier(
            SqlTaskRepository(database),
            NotificationService(SqlNotificationRepository(database))
        )

    return DeadlineScheduler(
        notifier_factory,
        interval_minutes=settings.DEADLINE_CHECK_INTERVAL_MINUTES,
        days_ahead=settings.DEADLINE_DAYS_AHEAD
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    settings: Settings = app.state.settings
    database: Database = app.state.database
    scheduler: Optional[DeadlineScheduler] = None

    # Startup
    logger.info(f"🚀 Запуск {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    if settings.CREATE_TABLES:
        await database.create_all()

    if settings.deadline_job_enabled:
        scheduler = build_deadline_scheduler(settings, database)
        scheduler.start()

    logger.info("✅ Сервис готов к работе")

    yield

    # Shutdown
    logger.info("🛑 Остановка сервиса...")
    try:
        if scheduler:
            scheduler.shutdown()
        await database.dispose()
        logger.info("✅ Ресурсы очищены")
    except Exception as e:
        logger.error(f"❌ Ошибка при остановке: {e}")


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    session_provider: Optional[SessionProvider] = None
) -> FastAPI:
    """Фабрика для создания приложения"""
    settings = settings or get_settings()
    setup_logger(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)

    database = database or Database.from_settings(settings)
    session_provider = session_provider or DatabaseSessionProvider(
        SqlSessionRepository(database),
        cookie_name=settings.SESSION_COOKIE_NAME
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="API командной работы: проекты, задачи, уведомления",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.database = database
    app.state.session_provider = session_provider

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов и время обработки"""
        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            log_request(request, start_time, 500)
            logger.error(f"❌ Ошибка обработки запроса: {e}")
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

        process_time = log_request(request, start_time, response.status_code)
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    # ===== РОУТЕРЫ =====

    app.include_router(tasks.router)
    app.include_router(users.router)
    app.include_router(notifications.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        """Проверка состояния сервиса"""
        return HealthCheck(
            status="healthy",
            service=settings.APP_NAME,
            version=settings.VERSION,
            timestamp=time.time()
        )

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(AuthenticationMissing)
    async def unauthorized_handler(request: Request, exc: AuthenticationMissing):
        """Нет сессии -> 401"""
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Некорректные параметры или тело запроса -> 400"""
        logger.warning(f"⚠️ Некорректный запрос {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Обработчик HTTP исключений"""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        """Обработчик 500 ошибок: детали только в логе"""
        logger.error(f"Internal server error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


def run_server(
    host: str = None,
    port: int = None,
    reload: bool = None
):
    """Запуск сервиса"""
    settings = get_settings()

    # Используем настройки по умолчанию если не переданы
    host = host or settings.HOST
    port = port or settings.PORT
    reload = reload if reload is not None else settings.DEBUG

    logger.info(f"🌐 Запуск API на http://{host}:{port}")

    try:
        uvicorn.run(
            "synergysphere.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level="debug" if settings.DEBUG else "info",
            server_header=False
        )
    except KeyboardInterrupt:
        logger.info("👋 Сервис остановлен")


def main():
    import argparse

    parser = argparse.ArgumentParser(description='Запуск SynergySphere API')
    parser.add_argument('--host', default=None, help='Host для запуска')
    parser.add_argument('--port', type=int, default=None, help='Port для запуска')
    parser.add_argument('--reload', action='store_true', default=None, help='Автоперезагрузка')

    args = parser.parse_args()

    run_server(host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
