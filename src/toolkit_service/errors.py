"""
Error taxonomy for the Toolkit Service.

Every failure the query and mutation layers surface is one of the kinds
defined here. Store failures are classified from the structured codes the
database driver attaches to its exceptions; the original cause is logged,
never exposed to the caller.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from .logging_config import logger

# PostgreSQL SQLSTATE codes (class 23, integrity constraint violation)
PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"
# PostgreSQL SQLSTATE classes that mean the server could not be reached/used
PG_UNAVAILABLE_CLASSES = ("08", "53", "57")

# SQLite extended result code names (sqlite3.Error.sqlite_errorname)
SQLITE_UNIQUE_ERRORS = ("SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY")
SQLITE_FOREIGN_KEY_ERRORS = ("SQLITE_CONSTRAINT_FOREIGNKEY",)
SQLITE_UNAVAILABLE_ERRORS = ("SQLITE_CANTOPEN", "SQLITE_BUSY", "SQLITE_IOERR")


@dataclass(frozen=True)
class FieldViolation:
    """A single violated field rule."""

    field: str
    rule: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class ToolkitError(Exception):
    """Base class of every error kind raised by the service layers."""

    status_code: int = 500
    default_message: str = "Unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def details(self) -> Optional[List[Any]]:
        return None


class ValidationError(ToolkitError):
    """Malformed or missing input, detected before the store is touched."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, violations: List[FieldViolation], message: Optional[str] = None):
        self.violations = list(violations)
        if message is None:
            message = "Validation failed: " + "; ".join(
                v.message for v in self.violations
            )
        super().__init__(message)

    @property
    def details(self) -> List[Dict[str, str]]:
        return [v.to_dict() for v in self.violations]


class InvalidParameter(ToolkitError):
    """Out-of-range query parameter (pagination)."""

    status_code = 400
    default_message = "Invalid pagination parameters"


class NotFound(ToolkitError):
    """The identifier has no matching record."""

    status_code = 404
    default_message = "Resource not found"


class DuplicateKey(ToolkitError):
    """A uniqueness constraint was violated at the store level."""

    status_code = 409
    default_message = "Tool with this URL already exists"


class ForeignKeyViolation(ToolkitError):
    """A reference points at a record that does not exist."""

    status_code = 400
    default_message = "Invalid user reference"


class StorageUnavailable(ToolkitError):
    """The store could not be reached."""

    status_code = 500
    default_message = "Storage is temporarily unavailable"


class StorageError(ToolkitError):
    """Unclassified store failure."""

    status_code = 500
    default_message = "Storage operation failed"


def _driver_error(exc: BaseException) -> Optional[BaseException]:
    """Return the DBAPI exception wrapped by SQLAlchemy, if any."""
    if isinstance(exc, DBAPIError):
        return exc.orig
    return None


def _sqlstate(orig: Optional[BaseException]) -> Optional[str]:
    # psycopg 3 exposes `sqlstate`, psycopg2 exposes `pgcode`
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    return str(code) if code else None


def _sqlite_error_name(orig: Optional[BaseException]) -> Optional[str]:
    name = getattr(orig, "sqlite_errorname", None)
    return str(name) if name else None


def classify_store_error(exc: BaseException, operation: str) -> ToolkitError:
    """
    Map a store-level exception to a taxonomy kind.

    Args:
        exc: The exception raised by SQLAlchemy or the network stack
        operation: Short description used in logs and public messages

    Returns:
        The taxonomy error to raise in place of `exc`
    """
    if isinstance(exc, ToolkitError):
        return exc

    orig = _driver_error(exc)
    sqlstate = _sqlstate(orig)
    sqlite_name = _sqlite_error_name(orig)

    error: ToolkitError
    if isinstance(exc, IntegrityError):
        if sqlstate == PG_UNIQUE_VIOLATION or sqlite_name in SQLITE_UNIQUE_ERRORS:
            error = DuplicateKey()
        elif (
            sqlstate == PG_FOREIGN_KEY_VIOLATION
            or sqlite_name in SQLITE_FOREIGN_KEY_ERRORS
        ):
            error = ForeignKeyViolation()
        else:
            error = StorageError(f"Failed to {operation}")
    elif (
        isinstance(exc, (OperationalError, InterfaceError, DisconnectionError, OSError))
        or (isinstance(exc, DBAPIError) and exc.connection_invalidated)
        or (sqlstate is not None and sqlstate[:2] in PG_UNAVAILABLE_CLASSES)
        or sqlite_name in SQLITE_UNAVAILABLE_ERRORS
    ):
        error = StorageUnavailable(f"Storage unavailable during {operation}")
    else:
        error = StorageError(f"Failed to {operation}")

    logger.error(
        f"Store error during {operation} classified as {type(error).__name__}: "
        f"{exc.__class__.__name__}: {exc}"
    )
    return error


STORE_ERRORS = (SQLAlchemyError, OSError)
