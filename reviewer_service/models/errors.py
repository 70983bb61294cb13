# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Caller-facing error taxonomy.

Every classified failure is a `DomainError` carrying a machine-readable
code and a human message. Anything else is an internal fault.
"""

from enum import Enum


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    TEAM_EXISTS = "TEAM_EXISTS"
    PR_EXISTS = "PR_EXISTS"
    PR_MERGED = "PR_MERGED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    NO_CANDIDATE = "NO_CANDIDATE"
    BAD_REQUEST = "BAD_REQUEST"


CONFLICT_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.TEAM_EXISTS,
    ErrorCode.PR_EXISTS,
    ErrorCode.PR_MERGED,
    ErrorCode.NOT_ASSIGNED,
    ErrorCode.NO_CANDIDATE,
})


class DomainError(Exception):
    """A classified, caller-facing error."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(f"{code.value}: {message}")
        self.code = code
        self.message = message

    @property
    def http_status(self) -> int:
        if self.code == ErrorCode.NOT_FOUND:
            return 404
        if self.code in CONFLICT_CODES:
            return 409
        return 400

    @classmethod
    def not_found(cls) -> "DomainError":
        return cls(ErrorCode.NOT_FOUND, "resource not found")
