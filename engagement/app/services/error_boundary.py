"""
Use-case error boundary.

Typed domain failures raised inside a unit of work become ``Result`` errors;
nothing below the presentation layer has to know about HTTP.
"""

import functools
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from engagement.domain.errors import EngagementError
from engagement.libs.result import Error, Return

logger = logging.getLogger(__name__)


def returns_result(func):
    """Convert EngagementError / store failures raised by ``execute`` into Result errors"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except EngagementError as exc:
            return Return.err(exc.to_error())
        except IntegrityError as exc:
            logger.warning("Integrity conflict in %s: %s", func.__qualname__, exc.orig)
            return Return.err(Error("CONFLICT", "The change conflicts with existing data"))
        except SQLAlchemyError as exc:
            logger.error("Store failure in %s: %s", func.__qualname__, exc)
            return Return.err(Error("STORE_ERROR", "The store rejected the operation"))

    return wrapper
