"""
Сервис авторизации действий над задачами и проектами
"""

import logging

from synergysphere.core.repositories import ProjectMemberRepository, TaskRepository
from synergysphere.models import ProjectRole

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Решает, может ли пользователь выполнить привилегированное действие.

    "Нельзя" и "не найдено" возвращаются как False. Ошибки хранилища
    (PersistenceError) пробрасываются вызывающему коду без изменений,
    чтобы граница могла отличить отказ в доступе от сбоя.
    """

    def __init__(self, tasks: TaskRepository, members: ProjectMemberRepository):
        self.tasks = tasks
        self.members = members

    async def can_delete_task(self, actor_id: str, task_id: str) -> bool:
        """Удалять задачу может только ее создатель"""
        if not actor_id or not task_id:
            return False

        task = await self.tasks.get(task_id)
        if task is None:
            logger.debug(f"Задача {task_id} не найдена, удаление запрещено")
            return False

        return task.created_by_id == actor_id

    async def can_access_project(self, actor_id: str, project_id: str) -> bool:
        """Доступ к проекту есть у любого участника"""
        if not actor_id or not project_id:
            return False
        member = await self.members.get(project_id, actor_id)
        return member is not None

    async def can_modify_project(self, actor_id: str, project_id: str) -> bool:
        """Изменять проект может участник с ролью admin"""
        if not actor_id or not project_id:
            return False
        member = await self.members.get(project_id, actor_id)
        return member is not None and member.role == ProjectRole.ADMIN
