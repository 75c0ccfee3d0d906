#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SynergySphere - Repositories
Интерфейсы хранилища и их реализация на SQLAlchemy.

Сервисы работают только с абстрактными репозиториями, поэтому логику
авторизации и уведомлений можно тестировать без БД. Каждая операция
SQL-реализации выполняется в собственной короткой транзакции.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import and_, insert, select, update

from synergysphere.core.database import Database
from synergysphere.core.tables import (
    new_id, notifications_table, project_members_table, projects_table,
    sessions_table, tasks_table, users_table
)
from synergysphere.exceptions import NotificationPersistenceError, PersistenceError
from synergysphere.models import (
    Actor, Notification, ProjectMember, ProjectRole, Session, Task,
    TaskPriority, TaskStatus, UserSummary
)
from synergysphere.utils.datetime_utils import utcnow
from synergysphere.utils.decorators import translate_errors

logger = logging.getLogger(__name__)


# ===== ПРЕОБРАЗОВАНИЕ СТРОК =====

def _task_from_row(row: Mapping[str, Any]) -> Task:
    priority = row["priority"]
    return Task(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TaskStatus(row["status"]),
        priority=TaskPriority(priority) if priority else None,
        due_date=row["due_date"],
        estimated_hours=row["estimated_hours"],
        project_id=row["project_id"],
        assignee_id=row["assignee_id"],
        created_by_id=row["created_by_id"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _notification_from_row(row: Mapping[str, Any]) -> Notification:
    return Notification(
        id=row["id"],
        user_id=row["user_id"],
        message=row["message"],
        type=row["type"],
        project_id=row["project_id"],
        task_id=row["task_id"],
        is_read=bool(row["is_read"]),
        created_at=row["created_at"],
    )


def _actor_from_row(row: Mapping[str, Any]) -> Actor:
    return Actor(
        id=row["id"],
        email=row["email"] or "",
        name=row["name"] or "",
        image=row["image"],
    )


# ===== ИНТЕРФЕЙСЫ =====

class TaskRepository(ABC):

    @abstractmethod
    async def get(self, task_id: str) -> Optional[Task]:
        """Задача по id или None"""

    @abstractmethod
    async def find_due_between(self, start: datetime, end: datetime,
                               assignee_id: Optional[str] = None) -> List[Tuple[Task, Optional[str]]]:
        """Незавершенные задачи со сроком в [start, end) и имя проекта"""


class UserRepository(ABC):

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Actor]:
        pass

    @abstractmethod
    async def list_summaries(self) -> List[UserSummary]:
        pass


class NotificationRepository(ABC):

    @abstractmethod
    async def add(self, values: Dict[str, Any]) -> Notification:
        pass

    @abstractmethod
    async def add_many(self, items: Sequence[Dict[str, Any]]) -> List[Notification]:
        """Вставка одной транзакцией: все или ничего"""

    @abstractmethod
    async def list_for_user(self, user_id: str, unread_only: bool = False,
                            limit: int = 50) -> List[Notification]:
        pass

    @abstractmethod
    async def mark_read(self, user_id: str, notification_ids: Sequence[str]) -> int:
        pass

    @abstractmethod
    async def mark_all_read(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def exists(self, user_id: str, task_id: str, type: str) -> bool:
        pass


class ProjectMemberRepository(ABC):

    @abstractmethod
    async def get(self, project_id: str, user_id: str) -> Optional[ProjectMember]:
        pass


class SessionRepository(ABC):

    @abstractmethod
    async def find_by_token(self, token: str) -> Optional[Session]:
        pass


# ===== SQLALCHEMY =====

class SqlRepository:
    """База для SQL-репозиториев"""

    def __init__(self, database: Database):
        self.database = database


class SqlTaskRepository(SqlRepository, TaskRepository):

    @translate_errors(PersistenceError, "Failed to load task")
    async def get(self, task_id: str) -> Optional[Task]:
        async with self.database.session() as session:
            result = await session.execute(
                select(tasks_table).where(tasks_table.c.id == task_id)
            )
            row = result.mappings().first()
        return _task_from_row(row) if row else None

    @translate_errors(PersistenceError, "Failed to load tasks")
    async def find_due_between(self, start: datetime, end: datetime,
                               assignee_id: Optional[str] = None) -> List[Tuple[Task, Optional[str]]]:
        conditions = [
            tasks_table.c.due_date >= start,
            tasks_table.c.due_date < end,
            tasks_table.c.status != TaskStatus.DONE,
        ]
        if assignee_id is not None:
            conditions.append(tasks_table.c.assignee_id == assignee_id)

        query = (
            select(tasks_table, projects_table.c.name.label("project_name"))
            .select_from(tasks_table.outerjoin(projects_table, tasks_table.c.project_id == projects_table.c.id))
            .where(and_(*conditions))
            .order_by(tasks_table.c.due_date)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            rows = result.mappings().all()
        return [(_task_from_row(row), row["project_name"]) for row in rows]

    @translate_errors(PersistenceError, "Failed to create task")
    async def create(self, title: str, project_id: str, created_by_id: str,
                     description: Optional[str] = None,
                     status: TaskStatus = TaskStatus.TODO,
                     priority: Optional[TaskPriority] = TaskPriority.MEDIUM,
                     due_date: Optional[datetime] = None,
                     estimated_hours: Optional[str] = None,
                     assignee_id: Optional[str] = None) -> Task:
        now = utcnow()
        values = {
            "id": new_id(),
            "title": title,
            "description": description,
            "status": status,
            "priority": priority.value if priority else None,
            "due_date": due_date,
            "estimated_hours": estimated_hours,
            "project_id": project_id,
            "assignee_id": assignee_id,
            "created_by_id": created_by_id,
            "created_at": now,
            "updated_at": now,
        }
        async with self.database.session() as session:
            await session.execute(insert(tasks_table).values(**values))
        return _task_from_row(values)


class SqlUserRepository(SqlRepository, UserRepository):

    @translate_errors(PersistenceError, "Failed to load user")
    async def get(self, user_id: str) -> Optional[Actor]:
        async with self.database.session() as session:
            result = await session.execute(
                select(users_table).where(users_table.c.id == user_id)
            )
            row = result.mappings().first()
        return _actor_from_row(row) if row else None

    @translate_errors(PersistenceError, "Failed to fetch users")
    async def list_summaries(self) -> List[UserSummary]:
        query = select(users_table.c.id, users_table.c.name, users_table.c.email)
        async with self.database.session() as session:
            result = await session.execute(query)
            rows = result.mappings().all()
        return [UserSummary(id=row["id"], name=row["name"], email=row["email"]) for row in rows]

    @translate_errors(PersistenceError, "Failed to create user")
    async def create(self, name: str, email: str, user_id: Optional[str] = None,
                     image: Optional[str] = None) -> Actor:
        values = {"id": user_id or new_id(), "name": name, "email": email, "image": image}
        async with self.database.session() as session:
            await session.execute(insert(users_table).values(**values))
        return _actor_from_row(values)


class SqlNotificationRepository(SqlRepository, NotificationRepository):

    @staticmethod
    def _prepare(values: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": new_id(),
            "user_id": values["user_id"],
            "message": values["message"],
            "type": values["type"],
            "project_id": values.get("project_id"),
            "task_id": values.get("task_id"),
            "is_read": False,
            "created_at": utcnow(),
        }

    @translate_errors(NotificationPersistenceError, "Failed to create notification")
    async def add(self, values: Dict[str, Any]) -> Notification:
        row = self._prepare(values)
        async with self.database.session() as session:
            await session.execute(insert(notifications_table).values(**row))
        return _notification_from_row(row)

    @translate_errors(NotificationPersistenceError, "Failed to create notifications")
    async def add_many(self, items: Sequence[Dict[str, Any]]) -> List[Notification]:
        rows = [self._prepare(item) for item in items]
        if not rows:
            return []
        async with self.database.session() as session:
            await session.execute(insert(notifications_table), rows)
        return [_notification_from_row(row) for row in rows]

    @translate_errors(PersistenceError, "Failed to fetch notifications")
    async def list_for_user(self, user_id: str, unread_only: bool = False,
                            limit: int = 50) -> List[Notification]:
        conditions = [notifications_table.c.user_id == user_id]
        if unread_only:
            conditions.append(notifications_table.c.is_read.is_(False))

        query = (
            select(notifications_table)
            .where(and_(*conditions))
            .order_by(notifications_table.c.created_at.desc())
            .limit(limit)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            rows = result.mappings().all()
        return [_notification_from_row(row) for row in rows]

    @translate_errors(PersistenceError, "Failed to mark notifications as read")
    async def mark_read(self, user_id: str, notification_ids: Sequence[str]) -> int:
        if not notification_ids:
            return 0
        # Чужие уведомления отсекаются условием по user_id
        statement = (
            update(notifications_table)
            .where(and_(
                notifications_table.c.user_id == user_id,
                notifications_table.c.id.in_(list(notification_ids))
            ))
            .values(is_read=True)
        )
        async with self.database.session() as session:
            result = await session.execute(statement)
        return result.rowcount

    @translate_errors(PersistenceError, "Failed to mark notifications as read")
    async def mark_all_read(self, user_id: str) -> int:
        statement = (
            update(notifications_table)
            .where(and_(
                notifications_table.c.user_id == user_id,
                notifications_table.c.is_read.is_(False)
            ))
            .values(is_read=True)
        )
        async with self.database.session() as session:
            result = await session.execute(statement)
        return result.rowcount

    @translate_errors(PersistenceError, "Failed to fetch notifications")
    async def exists(self, user_id: str, task_id: str, type: str) -> bool:
        query = (
            select(notifications_table.c.id)
            .where(and_(
                notifications_table.c.user_id == user_id,
                notifications_table.c.task_id == task_id,
                notifications_table.c.type == type
            ))
            .limit(1)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            return result.first() is not None


class SqlProjectRepository(SqlRepository):
    """Проекты и участники (запись нужна для наполнения данных)"""

    @translate_errors(PersistenceError, "Failed to create project")
    async def create(self, name: str, created_by_id: str,
                     description: Optional[str] = None) -> str:
        project_id = new_id()
        async with self.database.session() as session:
            await session.execute(insert(projects_table).values(
                id=project_id,
                name=name,
                description=description,
                created_by_id=created_by_id
            ))
            # Создатель проекта становится его владельцем
            await session.execute(insert(project_members_table).values(
                id=new_id(),
                project_id=project_id,
                user_id=created_by_id,
                role=ProjectRole.OWNER
            ))
        return project_id

    @translate_errors(PersistenceError, "Failed to add project member")
    async def add_member(self, project_id: str, user_id: str,
                         role: ProjectRole = ProjectRole.MEMBER) -> ProjectMember:
        async with self.database.session() as session:
            await session.execute(insert(project_members_table).values(
                id=new_id(),
                project_id=project_id,
                user_id=user_id,
                role=role
            ))
        return ProjectMember(project_id=project_id, user_id=user_id, role=role)


class SqlProjectMemberRepository(SqlRepository, ProjectMemberRepository):

    @translate_errors(PersistenceError, "Failed to load project member")
    async def get(self, project_id: str, user_id: str) -> Optional[ProjectMember]:
        query = select(project_members_table).where(and_(
            project_members_table.c.project_id == project_id,
            project_members_table.c.user_id == user_id
        ))
        async with self.database.session() as session:
            result = await session.execute(query)
            row = result.mappings().first()
        if not row:
            return None
        return ProjectMember(
            project_id=row["project_id"],
            user_id=row["user_id"],
            role=ProjectRole(row["role"])
        )


class SqlSessionRepository(SqlRepository, SessionRepository):

    @translate_errors(PersistenceError, "Failed to load session")
    async def find_by_token(self, token: str) -> Optional[Session]:
        query = (
            select(
                sessions_table.c.id.label("session_id"),
                sessions_table.c.expires_at,
                users_table.c.id,
                users_table.c.email,
                users_table.c.name,
                users_table.c.image,
            )
            .select_from(sessions_table.join(users_table, sessions_table.c.user_id == users_table.c.id))
            .where(sessions_table.c.token == token)
        )
        async with self.database.session() as session:
            result = await session.execute(query)
            row = result.mappings().first()
        if not row:
            return None
        return Session(id=row["session_id"], user=_actor_from_row(row), expires_at=row["expires_at"])

    @translate_errors(PersistenceError, "Failed to create session")
    async def create(self, user_id: str, token: str, expires_at: datetime) -> str:
        session_id = new_id()
        async with self.database.session() as session:
            await session.execute(insert(sessions_table).values(
                id=session_id,
                token=token,
                user_id=user_id,
                expires_at=expires_at
            ))
        return session_id
