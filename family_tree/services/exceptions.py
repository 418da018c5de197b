"""
Service layer errors and the decorator that translates lower-level failures into them
"""

import functools

import sqlalchemy.exc


class ServiceError(Exception):
    """Base exception for service layer errors"""


class ValidationError(ServiceError):
    """Bad input: malformed ids, dates or enum values, self-links"""


class NotFoundError(ServiceError):
    """Unknown member or relationship, or no path between two members"""


class ConflictError(ServiceError):
    """Duplicate relationship or other integrity violation"""


class DatabaseError(ServiceError):
    """Database unreachable or query failed"""


# First matching class wins, so subclasses come before their bases
TRANSLATIONS = (
    (sqlalchemy.exc.IntegrityError, ConflictError, "Data integrity violation"),
    (sqlalchemy.exc.OperationalError, DatabaseError, "Database connection error"),
    (sqlalchemy.exc.SQLAlchemyError, DatabaseError, "Database error"),
    (KeyError, ValidationError, "Missing required field"),
    (ValueError, ValidationError, "Invalid input"),
)


def translate_exception(error: Exception) -> ServiceError:
    """Service error equivalent of a lower-level exception"""
    for source, target, prefix in TRANSLATIONS:
        if isinstance(error, source):
            return target(f"{prefix}: {error}")
    return ServiceError(f"Unexpected service error: {error}")


def handle_service_exceptions(logger=None):
    """Re-raise service errors unchanged and translate everything else, chained with `from`"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ServiceError:
                raise
            except Exception as e:
                translated = translate_exception(e)
                if logger:
                    unexpected = type(translated) is ServiceError
                    logger.error(f"{type(e).__name__} in {func.__name__}: {e}", exc_info=unexpected)
                raise translated from e
        return wrapper
    return decorator
