#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Configuration
Конфигурация API сервиса с настройками для разных сред

Версия: 1.0.0
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки сервиса SynergySphere"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="SynergySphere API",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия сервиса"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing/staging)"
    )

    DEBUG: bool = Field(
        default=True,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(
        default="0.0.0.0",
        description="Хост для запуска сервиса"
    )

    PORT: int = Field(
        default=8000,
        description="Порт для запуска сервиса"
    )

    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        description="Разрешенные источники для CORS"
    )

    # ===== БАЗА ДАННЫХ =====

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./synergysphere.db",
        description="URL базы данных (async драйвер)"
    )

    DB_POOL_SIZE: int = Field(
        default=5,
        description="Размер пула соединений БД"
    )

    DB_MAX_OVERFLOW: int = Field(
        default=10,
        description="Максимальное количество дополнительных соединений"
    )

    DB_ECHO: bool = Field(
        default=False,
        description="Логировать SQL запросы"
    )

    CREATE_TABLES: bool = Field(
        default=True,
        description="Создавать схему при запуске (без миграций)"
    )

    # ===== АВТОРИЗАЦИЯ =====

    SESSION_COOKIE_NAME: str = Field(
        default="better-auth.session_token",
        description="Имя cookie с токеном сессии"
    )

    # ===== УВЕДОМЛЕНИЯ =====

    NOTIFICATIONS_LIMIT: int = Field(
        default=50,
        description="Сколько последних уведомлений отдавать в списке"
    )

    DEADLINE_DAYS_AHEAD: int = Field(
        default=3,
        description="Окно (дни) для напоминаний о сроках задач"
    )

    DEADLINE_CHECK_INTERVAL_MINUTES: int = Field(
        default=0,
        description="Интервал фоновой проверки сроков в минутах (0 - выключено)"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )

    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Файл для логов с ротацией (None - только консоль)"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        """Валидация среды выполнения"""
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Валидация уровня логирования"""
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('PORT')
    @classmethod
    def validate_port(cls, v):
        """Валидация порта"""
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def validate_origins(cls, v):
        """Валидация CORS origins"""
        if isinstance(v, str):
            # Если передана строка, разделяем по запятой
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @field_validator('NOTIFICATIONS_LIMIT', 'DEADLINE_DAYS_AHEAD', 'DEADLINE_CHECK_INTERVAL_MINUTES')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("value must be non-negative")
        return v

    @model_validator(mode='after')
    def validate_production_settings(self):
        """Валидация настроек для продакшена"""
        if self.ENVIRONMENT == 'production':
            # В продакшене отключаем DEBUG
            self.DEBUG = False
        return self

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    @property
    def is_production(self) -> bool:
        """Проверка продакшен среды"""
        return self.ENVIRONMENT == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def deadline_job_enabled(self) -> bool:
        return self.DEADLINE_CHECK_INTERVAL_MINUTES > 0


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки (кэшированные)"""
    return Settings()
