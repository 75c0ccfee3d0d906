#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Database Manager
Подключение к БД: async engine, фабрика сессий, создание схемы
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)

from synergysphere.config import Settings
from synergysphere.core.tables import metadata

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite по умолчанию не проверяет внешние ключи
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine и фабрика сессий одного приложения"""

    def __init__(self, url: str, echo: bool = False,
                 pool_size: Optional[int] = None, max_overflow: Optional[int] = None):
        self.url = url
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}
        # У SQLite свой пул, параметры размера к нему не применимы
        if not url.startswith("sqlite"):
            if pool_size is not None:
                engine_kwargs["pool_size"] = pool_size
            if max_overflow is not None:
                engine_kwargs["max_overflow"] = max_overflow

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Сессия с фиксацией при успехе и откатом при ошибке"""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Создание таблиц (без миграций)"""
        async with self.engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info("✅ Схема БД создана")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("✅ Соединения с БД закрыты")
