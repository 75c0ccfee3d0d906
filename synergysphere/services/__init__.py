# services/__init__.py

"""
Сервисы SynergySphere: авторизация, уведомления, сессии, сроки задач.
"""

from .authorization import AuthorizationService
from .deadlines import DeadlineNotifier, DeadlineScheduler
from .notifications import NotificationService
from .sessions import DatabaseSessionProvider, SessionProvider

__all__ = [
    'AuthorizationService',
    'DeadlineNotifier',
    'DeadlineScheduler',
    'NotificationService',
    'DatabaseSessionProvider',
    'SessionProvider',
]
