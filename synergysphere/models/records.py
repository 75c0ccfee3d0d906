# models/records.py

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Optional

from synergysphere.models.enums import ProjectRole, TaskPriority, TaskStatus


@dataclass(frozen=True)
class Actor:
    """Авторизованный пользователь, от имени которого выполняется запрос"""
    id: str
    email: str
    name: str
    image: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """Сессия, найденная по заголовкам запроса"""
    id: str
    user: Actor
    expires_at: datetime


@dataclass(frozen=True)
class UserSummary:
    id: str
    name: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    project_id: str
    created_by_id: str
    created_at: datetime
    updated_at: datetime
    status: TaskStatus = TaskStatus.TODO
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    estimated_hours: Optional[str] = None
    assignee_id: Optional[str] = None


@dataclass(frozen=True)
class ProjectMember:
    project_id: str
    user_id: str
    role: ProjectRole


@dataclass(frozen=True)
class Notification:
    """Запись уведомления. Меняется только флаг is_read"""
    id: str
    user_id: str
    message: str
    type: str
    created_at: datetime
    is_read: bool = False
    project_id: Optional[str] = None
    task_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "message": self.message,
            "type": self.type,
            "projectId": self.project_id,
            "taskId": self.task_id,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class UpcomingTask:
    """Задача с приближающимся сроком"""
    id: str
    title: str
    due_date: datetime
    status: TaskStatus
    project_id: str
    days_until_due: int
    assignee_id: Optional[str] = None
    project_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "dueDate": self.due_date.isoformat(),
            "assigneeId": self.assignee_id,
            "projectId": self.project_id,
            "projectName": self.project_name,
            "status": self.status.value,
            "daysUntilDue": self.days_until_due,
        }
