import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class DBException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def db_exception(func):
    """Translate driver errors raised by a service write into DBException.

    The owning session is rolled back first when the wrapped callable is a
    service method (``self.db``) or receives the session as an argument.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            _rollback(args, kwargs)
            logger.warning(f"Integrity error in {func.__name__}: {e.orig}")
            raise DBException("Duplicate entry: already exists", 409)
        except SQLAlchemyError:
            _rollback(args, kwargs)
            logger.error(f"Database error in {func.__name__}", exc_info=True)
            raise DBException("Database error occurred", 500)

    return wrapper


def _rollback(args, kwargs):
    db = kwargs.get("db")
    if db is None and args:
        db = getattr(args[0], "db", None)
    if db is None:
        db = next((arg for arg in args if isinstance(arg, Session)), None)
    if db is not None:
        db.rollback()
