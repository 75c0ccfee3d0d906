import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import Settings
from ..dependencies import (
    get_current_actor, get_deadline_notifier, get_notification_service, get_settings
)
from ..exceptions import NotificationValidationError
from ..models import Actor
from ..models.schemas import DeadlineCheckRequest, MarkReadRequest, NotificationCreate
from ..services import DeadlineNotifier, NotificationService
from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def get_notifications(
    current_user: Actor = Depends(get_current_actor),
    unread: Optional[str] = Query(None),
    notifications: NotificationService = Depends(get_notification_service)
):
    """
    Последние уведомления текущего пользователя, новые первыми
    """
    try:
        items = await notifications.list_notifications(
            current_user.id,
            unread_only=unread == "true"
        )

        return [item.to_dict() for item in items]

    except Exception as e:
        logger.error(f"❌ Ошибка получения уведомлений: {e}")
        return error_response(500, "Failed to fetch notifications")


@router.post("", status_code=201)
async def create_notification(
    current_user: Actor = Depends(get_current_actor),
    body: Optional[NotificationCreate] = None,
    notifications: NotificationService = Depends(get_notification_service)
):
    """
    Создать уведомление для текущего пользователя (для проверки доставки)
    """
    try:
        body = body or NotificationCreate()

        notification = await notifications.create_notification(
            user_id=current_user.id,
            message=body.message,
            type=body.type,
            project_id=body.project_id or None,
            task_id=body.task_id or None
        )

        return notification.to_dict()

    except NotificationValidationError:
        return error_response(400, "Message and type are required")
    except Exception as e:
        logger.error(f"❌ Ошибка создания уведомления: {e}")
        return error_response(500, "Failed to create notification")


@router.post("/mark-read")
async def mark_notifications_read(
    current_user: Actor = Depends(get_current_actor),
    body: Optional[MarkReadRequest] = None,
    notifications: NotificationService = Depends(get_notification_service)
):
    """
    Отметить уведомления прочитанными (по списку id или все)
    """
    try:
        body = body or MarkReadRequest()
        if body.mark_all_as_read:
            await notifications.mark_all_read(current_user.id)
            return {"success": True, "message": "All unread notifications marked as read."}

        if not body.notification_ids:
            return error_response(400, "Notification IDs are required")

        await notifications.mark_read(current_user.id, body.notification_ids)

        return {"success": True, "markedIds": body.notification_ids}

    except Exception as e:
        logger.error(f"❌ Ошибка отметки уведомлений: {e}")
        return error_response(500, "Failed to mark notifications as read")


@router.get("/check-deadlines")
async def get_upcoming_deadlines(
    current_user: Actor = Depends(get_current_actor),
    days: Optional[int] = Query(None, ge=0, le=365),
    notifier: DeadlineNotifier = Depends(get_deadline_notifier),
    settings: Settings = Depends(get_settings)
):
    """
    Задачи текущего пользователя с приближающимся сроком (только чтение)
    """
    try:
        days_ahead = settings.DEADLINE_DAYS_AHEAD if days is None else days
        tasks = await notifier.find_upcoming(days_ahead, assignee_id=current_user.id)

        return {
            "tasks": [task.to_dict() for task in tasks],
            "count": len(tasks)
        }

    except Exception as e:
        logger.error(f"❌ Ошибка проверки сроков: {e}")
        return error_response(500, "Failed to check deadlines")


@router.post("/check-deadlines")
async def check_deadlines(
    current_user: Actor = Depends(get_current_actor),
    body: Optional[DeadlineCheckRequest] = None,
    notifier: DeadlineNotifier = Depends(get_deadline_notifier),
    settings: Settings = Depends(get_settings)
):
    """
    Создать напоминания о приближающихся сроках
    """
    try:
        body = body or DeadlineCheckRequest()
        days_ahead = settings.DEADLINE_DAYS_AHEAD if body.days_ahead is None else body.days_ahead
        assignee_id = None if body.for_all_users else current_user.id

        created = await notifier.notify_upcoming(days_ahead, assignee_id=assignee_id)

        if not created:
            return {
                "message": "No tasks with approaching deadlines found",
                "count": 0,
                "notifications": []
            }

        return {
            "message": f"Created {len(created)} deadline notifications",
            "count": len(created),
            "notifications": [item.to_dict() for item in created]
        }

    except Exception as e:
        logger.error(f"❌ Ошибка создания напоминаний о сроках: {e}")
        return error_response(500, "Failed to check deadlines")
