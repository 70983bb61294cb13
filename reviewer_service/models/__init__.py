"""Domain models and errors, re-exported for convenience."""
from reviewer_service.models.domain import (
    PRStatus,
    PullRequest,
    PullRequestShort,
    PullRequestStat,
    ReviewerStat,
    Team,
    TeamMember,
    User,
)
from reviewer_service.models.errors import DomainError, ErrorCode

__all__ = [
    "DomainError",
    "ErrorCode",
    "PRStatus",
    "PullRequest",
    "PullRequestShort",
    "PullRequestStat",
    "ReviewerStat",
    "Team",
    "TeamMember",
    "User",
]
