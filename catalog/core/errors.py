# Error taxonomy shared by the services and the HTTP layer

from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import structlog

logger = structlog.get_logger()


class CatalogError(Exception):
    """Base class for errors that cross the service boundary"""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInputError(CatalogError):
    """Client sent structurally or semantically wrong data"""

    status_code = 400


class NotFoundError(CatalogError):
    """Referenced entity does not exist"""

    status_code = 404


class ConflictError(CatalogError):
    """Unique-key collision or description mismatch on a shared entity"""

    status_code = 409


class InternalError(CatalogError):
    """Store unavailable, transaction failure or another unexpected fault"""

    status_code = 500


def is_foreign_key_violation(error: IntegrityError) -> bool:
    """True when the store rejected a write over a missing or still-referenced row"""
    orig = error.orig
    # psycopg exposes the SQLSTATE; SQLite only has the message
    if getattr(orig, "sqlstate", None) == "23503":
        return True
    return "foreign key" in str(orig).lower()


@contextmanager
def translate_store_errors(
        action: str,
        conflict_message: str | None = None,
        reference_message: str | None = None
):
    """
    Re-raise raw driver/ORM errors as typed catalog errors.

    Typed errors pass through untouched. ``conflict_message`` only applies to
    unique-key collisions; foreign-key failures get ``reference_message``.
    Wrap the whole ``async with uow`` block so the rollback has already
    happened when the error surfaces.
    """
    try:
        yield
    except CatalogError:
        raise
    except IntegrityError as e:
        if is_foreign_key_violation(e):
            logger.warning("store_reference_error", action=action, error=str(e.orig))
            raise ConflictError(
                reference_message or f"Failed to {action}: a referenced row is missing or still in use",
                details={"reason": "foreign_key"}
            ) from e
        logger.warning("store_integrity_error", action=action, error=str(e.orig))
        raise ConflictError(conflict_message or f"Failed to {action}: unique constraint violated") from e
    except SQLAlchemyError as e:
        logger.error("store_error", action=action, error=str(e))
        raise InternalError(f"Failed to {action}") from e
