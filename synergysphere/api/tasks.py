import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_authorization_service, get_current_actor
from ..models import Actor
from ..services import AuthorizationService
from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["tasks"])


@router.get("/{project_id}/tasks/{task_id}/permissions")
async def get_task_permissions(
    project_id: str,
    task_id: str,
    current_user: Actor = Depends(get_current_actor),
    authorization: AuthorizationService = Depends(get_authorization_service)
):
    """
    Проверить права текущего пользователя на задачу
    """
    try:
        can_delete = await authorization.can_delete_task(current_user.id, task_id)

        return {"canDelete": can_delete}

    except Exception as e:
        logger.error(f"❌ Ошибка проверки прав на задачу {task_id}: {e}")
        return error_response(500, "Failed to check permissions")
