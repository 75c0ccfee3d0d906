"""
Сервис уведомлений
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from synergysphere.core.repositories import NotificationRepository
from synergysphere.exceptions import NotificationValidationError
from synergysphere.models import Notification, NotificationTypes

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("user_id", "message", "type")


def _validate(values: Dict[str, Any]) -> Dict[str, Any]:
    for field_name in REQUIRED_FIELDS:
        value = values.get(field_name)
        if not isinstance(value, str) or not value.strip():
            raise NotificationValidationError(field_name)
    return values


class NotificationService:
    """Создание и чтение уведомлений.

    Запись уведомления - единственный побочный эффект: доставка и показ
    остаются внешней заботой. Повторы при сбое хранилища не выполняются.
    """

    def __init__(self, repository: NotificationRepository, default_limit: int = 50):
        self.repository = repository
        self.default_limit = default_limit

    async def create_notification(self, user_id: str, message: str, type: str,
                                  project_id: Optional[str] = None,
                                  task_id: Optional[str] = None) -> Notification:
        """Создать уведомление.

        Raises:
            NotificationValidationError: не заполнено обязательное поле
                (до какой-либо записи).
            NotificationPersistenceError: сбой хранилища, запись не выполнена.
        """
        values = _validate({
            "user_id": user_id,
            "message": message,
            "type": type,
            "project_id": project_id,
            "task_id": task_id,
        })
        notification = await self.repository.add(values)
        logger.info(f"🔔 Уведомление {notification.type} для пользователя {notification.user_id}")
        return notification

    async def create_notifications(self, items: Sequence[Dict[str, Any]]) -> List[Notification]:
        """Пакетное создание одной транзакцией"""
        if not items:
            return []
        prepared = [_validate(dict(item)) for item in items]
        notifications = await self.repository.add_many(prepared)
        logger.info(f"🔔 Создано уведомлений: {len(notifications)}")
        return notifications

    # ===== ТИПОВЫЕ УВЕДОМЛЕНИЯ =====

    async def create_task_assignment_notification(self, assignee_id: str, task_title: str,
                                                  project_name: str, project_id: str,
                                                  task_id: str) -> Notification:
        return await self.create_notification(
            user_id=assignee_id,
            message=f'You have been assigned to task "{task_title}" in project "{project_name}"',
            type=NotificationTypes.TASK_ASSIGNED,
            project_id=project_id,
            task_id=task_id,
        )

    async def create_task_update_notification(self, user_id: str, task_title: str,
                                              new_status: str, project_name: str,
                                              project_id: str, task_id: str) -> Notification:
        return await self.create_notification(
            user_id=user_id,
            message=(f'Task "{task_title}" status has been updated to "{new_status}" '
                     f'in project "{project_name}"'),
            type=NotificationTypes.TASK_UPDATE,
            project_id=project_id,
            task_id=task_id,
        )

    async def create_project_member_notification(self, user_id: str, project_name: str,
                                                 role: str, project_id: str) -> Notification:
        return await self.create_notification(
            user_id=user_id,
            message=f'You have been added to the project "{project_name}" as a {role}',
            type=NotificationTypes.PROJECT_MEMBER_ADDED,
            project_id=project_id,
        )

    # ===== ЧТЕНИЕ И ОТМЕТКИ =====

    async def list_notifications(self, user_id: str, unread_only: bool = False,
                                 limit: Optional[int] = None) -> List[Notification]:
        return await self.repository.list_for_user(
            user_id,
            unread_only=unread_only,
            limit=limit or self.default_limit
        )

    async def mark_read(self, user_id: str, notification_ids: Sequence[str]) -> int:
        updated = await self.repository.mark_read(user_id, notification_ids)
        logger.debug(f"Отмечено прочитанными: {updated} (пользователь {user_id})")
        return updated

    async def mark_all_read(self, user_id: str) -> int:
        return await self.repository.mark_all_read(user_id)

    async def has_notification(self, user_id: str, task_id: str, type: str) -> bool:
        return await self.repository.exists(user_id, task_id, type)
