"""
Матрица прав по ролям в проекте
"""

from typing import Dict, FrozenSet, Iterable, List, Union

from synergysphere.models import ProjectRole

# Права роли перечислены явно; все, чего нет в списке, запрещено
ROLE_PERMISSIONS: Dict[ProjectRole, FrozenSet[str]] = {
    ProjectRole.OWNER: frozenset([
        'project:read', 'project:write', 'project:delete',
        'task:read', 'task:write', 'task:delete', 'task:assign',
        'member:read', 'member:invite', 'member:remove', 'member:role_change',
        'budget:read', 'budget:write',
        'comment:read', 'comment:write', 'comment:delete',
    ]),
    ProjectRole.ADMIN: frozenset([
        'project:read', 'project:write',
        'task:read', 'task:write', 'task:delete', 'task:assign',
        'member:read', 'member:invite', 'member:remove',
        'budget:read', 'budget:write',
        'comment:read', 'comment:write', 'comment:delete',
    ]),
    ProjectRole.MEMBER: frozenset([
        'project:read',
        'task:read', 'task:write',
        'member:read',
        'budget:read',
        'comment:read', 'comment:write',
    ]),
    ProjectRole.VIEWER: frozenset([
        'project:read',
        'task:read',
        'member:read',
        'comment:read',
    ]),
}

RoleLike = Union[ProjectRole, str]


def is_valid_role(role: str) -> bool:
    return role in {r.value for r in ProjectRole}


def _coerce(role: RoleLike):
    if isinstance(role, ProjectRole):
        return role
    if is_valid_role(role):
        return ProjectRole(role)
    return None


def has_permission(role: RoleLike, permission: str) -> bool:
    """Есть ли у роли право. Неизвестная роль прав не имеет"""
    resolved = _coerce(role)
    if resolved is None:
        return False
    return permission in ROLE_PERMISSIONS[resolved]


def can_perform(role: RoleLike, action: str) -> bool:
    return has_permission(role, action)


def get_role_permissions(role: RoleLike) -> List[str]:
    """Копия списка прав роли"""
    resolved = _coerce(role)
    if resolved is None:
        return []
    return sorted(ROLE_PERMISSIONS[resolved])


def can_assign_task_to_user(assigner_role: RoleLike, assignee_user_id: str,
                            project_member_ids: Iterable[str]) -> bool:
    """Назначать можно только при праве task:assign и только участникам проекта"""
    if not has_permission(assigner_role, 'task:assign'):
        return False
    return assignee_user_id in set(project_member_ids)


def can_modify_budget(role: RoleLike) -> bool:
    return has_permission(role, 'budget:write')


def can_view_budget(role: RoleLike) -> bool:
    return has_permission(role, 'budget:read')


def can_participate_in_project_chat(user_id: str, project_member_ids: Iterable[str]) -> bool:
    return user_id in set(project_member_ids)
