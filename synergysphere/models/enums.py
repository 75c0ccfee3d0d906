# models/enums.py

from enum import Enum


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ProjectRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class NotificationTypes:
    """Типы уведомлений (значение поля ``type``)"""

    # Проекты
    PROJECT_MEMBER_ADDED = "project_member_added"
    PROJECT_MESSAGE = "project_message"
    PROJECT_UPDATE = "project_update"

    # Задачи
    TASK_ASSIGNED = "task_assigned"
    TASK_UPDATE = "task_update"
    TASK_DUE_SOON = "task_due_soon"
    TASK_COMPLETED = "task_completed"

    # Чат
    CHAT_MENTION = "chat_mention"
    MENTION = "mention"

    # Системные
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
