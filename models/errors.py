from typing import Optional

from sqlalchemy.exc import DBAPIError

"""
Typed persistence errors. Callers branch on the exception class instead of
matching driver messages. translate_db_error() reads the driver's error code:
SQLSTATE for PostgreSQL, the extended result code name for SQLite.
"""


class PersistenceError(Exception):
    """A data-access failure with no more specific classification."""


class InvalidReferenceError(PersistenceError):
    """A foreign key points at a row that does not exist."""


class DuplicateRecordError(PersistenceError):
    """A primary key or unique constraint was violated."""


class RecordNotFoundError(PersistenceError):
    """The row an update targeted does not exist."""


_PG_SQLSTATES = {
    "23503": InvalidReferenceError,  # foreign_key_violation
    "23505": DuplicateRecordError,   # unique_violation
}

_SQLITE_ERRORS = {
    "SQLITE_CONSTRAINT_FOREIGNKEY": InvalidReferenceError,
    "SQLITE_CONSTRAINT_PRIMARYKEY": DuplicateRecordError,
    "SQLITE_CONSTRAINT_UNIQUE": DuplicateRecordError,
}


def _error_class(orig) -> type:
    sqlstate: Optional[str] = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _PG_SQLSTATES:
        return _PG_SQLSTATES[sqlstate]

    return _SQLITE_ERRORS.get(getattr(orig, "sqlite_errorname", None), PersistenceError)


def translate_db_error(exc: DBAPIError) -> PersistenceError:
    orig = exc.orig
    return _error_class(orig)(str(orig) if orig is not None else str(exc))
