# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models: pure data structures, NO FastAPI dependency.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PRStatus(str, Enum):
    OPEN = "OPEN"
    MERGED = "MERGED"


class User(BaseModel):
    """A user as seen by the user directory."""
    user_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    team_name: str = Field(..., min_length=1)
    is_active: bool


class TeamMember(BaseModel):
    """A single team member; `is_active` has no default on purpose."""
    user_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    is_active: bool


class Team(BaseModel):
    team_name: str = Field(..., min_length=1)
    members: list[TeamMember] = Field(default_factory=list)

    def active_member_ids(self, *exclude: str) -> set[str]:
        """Ids of active members, minus the given ids."""
        return {
            m.user_id for m in self.members
            if m.is_active and m.user_id not in exclude
        }


class PullRequest(BaseModel):
    """
    A pull request and its reviewer assignment.

    `status == MERGED` iff `merged_at` is set. Reviewers are distinct,
    never include the author, and hold at most two ids.
    """
    pull_request_id: str = Field(..., min_length=1)
    pull_request_name: str = Field(..., min_length=1)
    author_id: str = Field(..., min_length=1)
    status: PRStatus = PRStatus.OPEN
    assigned_reviewers: list[str] = Field(default_factory=list)
    created_at: datetime
    merged_at: Optional[datetime] = None

    @property
    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED

    def has_reviewer(self, user_id: str) -> bool:
        return user_id in self.assigned_reviewers

    def replace_reviewer(self, old_id: str, new_id: str) -> None:
        """Swap `old_id` for `new_id`, keeping its position in the list."""
        idx = self.assigned_reviewers.index(old_id)
        self.assigned_reviewers[idx] = new_id


class PullRequestShort(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus


class ReviewerStat(BaseModel):
    user_id: str
    assigned_count: int


class PullRequestStat(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus
    reviewer_count: int
