"""Typed storage errors.

The database is the only place the schema invariants are enforced. Drivers
report a rejected write as a generic ``IntegrityError``; callers that need to
turn it into a domain response use :func:`translate_integrity_error` to find
out which kind of constraint failed and, where the driver says so, its name.
"""

from sqlalchemy.exc import IntegrityError

FOREIGN_KEY = "foreign_key"
UNIQUE = "unique"
CHECK = "check"
NOT_NULL = "not_null"
UNKNOWN = "unknown"

_PG_SQLSTATES = {
    "23503": FOREIGN_KEY,
    "23505": UNIQUE,
    "23514": CHECK,
    "23502": NOT_NULL,
}

_SQLITE_PREFIXES = (
    ("FOREIGN KEY constraint failed", FOREIGN_KEY),
    ("UNIQUE constraint failed", UNIQUE),
    ("CHECK constraint failed", CHECK),
    ("NOT NULL constraint failed", NOT_NULL),
)


class StorageError(Exception):
    pass


class ConstraintViolation(StorageError):
    kind = UNKNOWN

    def __init__(self, detail: str, constraint: str | None = None):
        super().__init__(detail)
        self.detail = detail
        self.constraint = constraint

    def __str__(self) -> str:
        if self.constraint:
            return f"{self.kind} constraint {self.constraint!r} violated: {self.detail}"
        return f"{self.kind} constraint violated: {self.detail}"


class ForeignKeyViolation(ConstraintViolation):
    kind = FOREIGN_KEY


class UniqueViolation(ConstraintViolation):
    kind = UNIQUE


class CheckViolation(ConstraintViolation):
    kind = CHECK


class NotNullViolation(ConstraintViolation):
    kind = NOT_NULL


_VIOLATION_TYPES: dict[str, type[ConstraintViolation]] = {
    FOREIGN_KEY: ForeignKeyViolation,
    UNIQUE: UniqueViolation,
    CHECK: CheckViolation,
    NOT_NULL: NotNullViolation,
}


def _classify_postgres(orig) -> tuple[str, str | None] | None:
    # psycopg 3 exposes ``sqlstate``, psycopg2 ``pgcode``.
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate not in _PG_SQLSTATES:
        return None
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None) if diag is not None else None
    return _PG_SQLSTATES[sqlstate], constraint


def _classify_sqlite(message: str) -> tuple[str, str | None] | None:
    for prefix, kind in _SQLITE_PREFIXES:
        if not message.startswith(prefix):
            continue
        _, _, rest = message.partition(":")
        rest = rest.strip()
        if kind == CHECK and rest:
            # Named checks are reported by name.
            return kind, rest
        if kind in (UNIQUE, NOT_NULL) and rest:
            # Columns rather than a name, e.g. "users.email".
            return kind, rest
        return kind, None
    return None


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    orig = exc.orig
    message = str(orig).strip()

    classified = _classify_postgres(orig) or _classify_sqlite(message)
    if classified is None:
        return ConstraintViolation(message)

    kind, constraint = classified
    return _VIOLATION_TYPES[kind](message, constraint=constraint)
