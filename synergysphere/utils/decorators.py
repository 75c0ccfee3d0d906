import functools
import logging
from typing import Type

from sqlalchemy.exc import SQLAlchemyError

from synergysphere.exceptions import PersistenceError


def translate_errors(error_cls: Type[PersistenceError] = PersistenceError, message: str = "Database error"):
    """Ошибки SQLAlchemy внутри корутины -> error_cls"""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logging.getLogger(func.__module__).error(f"❌ {func.__qualname__}: {e}")
                raise error_cls(message) from e
        return wrapper
    return decorator
