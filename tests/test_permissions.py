"""Тесты матрицы прав по ролям."""

from synergysphere.models import ProjectRole
from synergysphere.services import permissions


def test_owner_has_every_permission():
    assert permissions.has_permission(ProjectRole.OWNER, "project:delete")
    assert permissions.has_permission("owner", "member:role_change")


def test_admin_cannot_delete_project():
    assert permissions.has_permission("admin", "task:delete")
    assert not permissions.has_permission("admin", "project:delete")
    assert not permissions.has_permission("admin", "member:role_change")


def test_viewer_is_read_only():
    assert permissions.can_perform("viewer", "task:read")
    assert not permissions.can_perform("viewer", "task:write")
    assert not permissions.can_perform("viewer", "comment:write")


def test_unknown_role_has_no_permissions():
    assert not permissions.is_valid_role("superuser")
    assert not permissions.has_permission("superuser", "project:read")
    assert permissions.get_role_permissions("superuser") == []


def test_role_permissions_are_a_copy():
    granted = permissions.get_role_permissions("member")
    granted.append("project:delete")

    assert "project:delete" not in permissions.get_role_permissions("member")
    assert not permissions.has_permission("member", "project:delete")


def test_task_assignment_requires_permission_and_membership():
    member_ids = ["user-alice", "user-bob"]

    assert permissions.can_assign_task_to_user("admin", "user-bob", member_ids)
    assert not permissions.can_assign_task_to_user("admin", "user-eve", member_ids)
    assert not permissions.can_assign_task_to_user("member", "user-bob", member_ids)


def test_budget_and_chat_helpers():
    assert permissions.can_modify_budget("admin")
    assert not permissions.can_modify_budget("member")
    assert permissions.can_view_budget("member")
    assert not permissions.can_view_budget("viewer")

    assert permissions.can_participate_in_project_chat("user-bob", ["user-bob"])
    assert not permissions.can_participate_in_project_chat("user-eve", ["user-bob"])
