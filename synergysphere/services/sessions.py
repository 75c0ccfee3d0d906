"""
Провайдер сессий: заголовки запроса -> сессия пользователя
"""

import logging
from typing import Mapping, Optional, Protocol
from urllib.parse import unquote

from synergysphere.core.repositories import SessionRepository
from synergysphere.models import Session
from synergysphere.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    async def get_session(self, headers: Mapping[str, str]) -> Optional[Session]:
        ...


def _parse_cookies(cookie_header: str) -> dict:
    cookies = {}
    for part in cookie_header.split(";"):
        name, sep, value = part.strip().partition("=")
        if sep and name:
            cookies[name] = value
    return cookies


class DatabaseSessionProvider:
    """Читает сессии, созданные внешним провайдером авторизации"""

    def __init__(self, sessions: SessionRepository, cookie_name: str = "better-auth.session_token"):
        self.sessions = sessions
        self.cookie_name = cookie_name

    def extract_token(self, headers: Mapping[str, str]) -> Optional[str]:
        authorization = headers.get("authorization") or ""
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()

        cookie_header = headers.get("cookie")
        if not cookie_header:
            return None
        raw = _parse_cookies(cookie_header).get(self.cookie_name)
        if not raw:
            return None
        # Подписанная cookie имеет вид "<token>.<signature>"
        token = unquote(raw).split(".", 1)[0]
        return token or None

    async def get_session(self, headers: Mapping[str, str]) -> Optional[Session]:
        token = self.extract_token(headers)
        if not token:
            return None

        session = await self.sessions.find_by_token(token)
        if session is None:
            return None

        if session.expires_at <= utcnow():
            logger.debug(f"Сессия {session.id} истекла")
            return None

        return session
