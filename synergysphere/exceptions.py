#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Exceptions
Иерархия исключений сервиса
"""


class SynergyError(Exception):
    """Базовое исключение сервиса"""
    pass


class AuthenticationMissing(SynergyError):
    """Нет действующей сессии (на границе - 401)"""
    pass


# ===== ХРАНИЛИЩЕ =====

class PersistenceError(SynergyError):
    """Инфраструктурная ошибка хранилища (на границе - 500)"""
    pass


class NotificationPersistenceError(PersistenceError):
    """Не удалось сохранить уведомление"""
    pass


# ===== ВАЛИДАЦИЯ =====

class NotificationValidationError(SynergyError, ValueError):
    """Не заполнено обязательное поле уведомления"""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Notification field '{field_name}' is required")
