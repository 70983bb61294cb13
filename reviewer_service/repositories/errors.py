# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Store-level errors. Services translate these into domain errors."""
from sqlalchemy.exc import IntegrityError

# SQLSTATE unique_violation
UNIQUE_VIOLATION = "23505"


class RepositoryError(Exception):
    pass


class NotFoundError(RepositoryError):
    pass


class AlreadyExistsError(RepositoryError):
    pass


class TeamNotFoundError(NotFoundError):
    pass


class TeamAlreadyExistsError(AlreadyExistsError):
    pass


class UserNotFoundError(NotFoundError):
    pass


class PRNotFoundError(NotFoundError):
    pass


class PRAlreadyExistsError(AlreadyExistsError):
    pass


class ReviewerLinkNotFoundError(NotFoundError):
    """No (pr, reviewer) link matched a conditional reviewer swap."""


class ReviewerAlreadyAssignedError(AlreadyExistsError):
    """The incoming reviewer already holds a slot on the PR."""


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode is not None:
        return pgcode == UNIQUE_VIOLATION
    # sqlite3 carries no SQLSTATE
    return "UNIQUE" in str(orig).upper()
