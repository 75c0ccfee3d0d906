import logging

from fastapi import APIRouter, Depends

from ..core.repositories import UserRepository
from ..dependencies import get_current_actor, get_user_repository
from .errors import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", dependencies=[Depends(get_current_actor)])
async def get_all_users(
    users: UserRepository = Depends(get_user_repository)
):
    """
    Получить список всех пользователей (id, name, email), без пагинации
    """
    try:
        summaries = await users.list_summaries()

        return [user.to_dict() for user in summaries]

    except Exception as e:
        logger.error(f"❌ Ошибка получения пользователей: {e}")
        return error_response(500, "Failed to fetch users")
