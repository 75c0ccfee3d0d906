"""
Напоминания о приближающихся сроках задач
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from synergysphere.core.repositories import TaskRepository
from synergysphere.models import Notification, NotificationTypes, UpcomingTask
from synergysphere.services.notifications import NotificationService
from synergysphere.utils.datetime_utils import add_days, days_until, utcnow

logger = logging.getLogger(__name__)


def deadline_message(task: UpcomingTask) -> str:
    in_project = f' in project "{task.project_name}"' if task.project_name else ""
    if task.days_until_due <= 1:
        when = "today" if task.days_until_due == 0 else "tomorrow"
        return f'Task "{task.title}" is due {when}{in_project}'
    return f'Task "{task.title}" is due in {task.days_until_due} days{in_project}'


class DeadlineNotifier:
    """Ищет незавершенные задачи со сроком в ближайшие дни и уведомляет исполнителей"""

    def __init__(self, tasks: TaskRepository, notifications: NotificationService):
        self.tasks = tasks
        self.notifications = notifications

    async def find_upcoming(self, days_ahead: int, assignee_id: Optional[str] = None,
                            now: Optional[datetime] = None) -> List[UpcomingTask]:
        now = now or utcnow()
        rows = await self.tasks.find_due_between(now, add_days(now, days_ahead), assignee_id)
        return [
            UpcomingTask(
                id=task.id,
                title=task.title,
                due_date=task.due_date,
                status=task.status,
                project_id=task.project_id,
                assignee_id=task.assignee_id,
                project_name=project_name,
                days_until_due=days_until(task.due_date, now),
            )
            for task, project_name in rows
        ]

    async def notify_upcoming(self, days_ahead: int, assignee_id: Optional[str] = None,
                              now: Optional[datetime] = None) -> List[Notification]:
        created = []
        for task in await self.find_upcoming(days_ahead, assignee_id, now):
            if not task.assignee_id:
                continue

            # Одно напоминание на задачу и исполнителя
            if await self.notifications.has_notification(task.assignee_id, task.id,
                                                         NotificationTypes.TASK_DUE_SOON):
                continue

            notification = await self.notifications.create_notification(
                user_id=task.assignee_id,
                message=deadline_message(task),
                type=NotificationTypes.TASK_DUE_SOON,
                project_id=task.project_id,
                task_id=task.id,
            )
            created.append(notification)

        if created:
            logger.info(f"📅 Создано напоминаний о сроках: {len(created)}")
        return created


class DeadlineScheduler:
    """Периодическая проверка сроков через APScheduler"""

    JOB_ID = 'deadline_reminders'

    def __init__(self, notifier_factory: Callable[[], DeadlineNotifier],
                 interval_minutes: int, days_ahead: int):
        self.notifier_factory = notifier_factory
        self.interval_minutes = interval_minutes
        self.days_ahead = days_ahead
        self.scheduler: Optional[AsyncIOScheduler] = None

    async def run_once(self) -> int:
        """Один проход; ошибки логируются, наружу не выходят"""
        try:
            created = await self.notifier_factory().notify_upcoming(self.days_ahead)
            return len(created)
        except Exception as e:
            logger.error(f"❌ Ошибка проверки сроков задач: {e}")
            return 0

    def start(self) -> None:
        self.scheduler = AsyncIOScheduler()
        self.scheduler.add_job(
            self.run_once,
            'interval',
            minutes=self.interval_minutes,
            id=self.JOB_ID,
            replace_existing=True
        )
        self.scheduler.start()
        logger.info(f"📅 Проверка сроков запущена (каждые {self.interval_minutes} мин)")

    def shutdown(self) -> None:
        if self.scheduler and self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("📅 Проверка сроков остановлена")
