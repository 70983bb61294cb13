# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from reviewer_service.models.domain import (
    PRStatus, PullRequest, PullRequestShort, PullRequestStat, ReviewerStat,
    Team, TeamMember, User,
)


# ── Requests ──

class TeamMemberIn(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=255)
    # strict and required: null or "false" strings are rejected, not coerced
    is_active: StrictBool


class TeamCreate(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=255)
    members: List[TeamMemberIn] = Field(..., min_length=1)

    def to_domain(self) -> Team:
        return Team(
            team_name=self.team_name,
            members=[TeamMember(**m.model_dump()) for m in self.members],
        )


class SetIsActiveRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    is_active: StrictBool


class PRCreate(BaseModel):
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(..., min_length=1, max_length=500)
    author_id: str = Field(..., min_length=1)


class PRMerge(BaseModel):
    pull_request_id: str = Field(..., min_length=1)


class PRReassign(BaseModel):
    pull_request_id: str = Field(..., min_length=1)
    old_reviewer_id: str = Field(..., min_length=1)


# ── Responses ──

class PullRequestOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PRStatus
    assigned_reviewers: List[str]
    created_at: datetime = Field(..., alias="createdAt")
    merged_at: Optional[datetime] = Field(None, alias="mergedAt")

    @classmethod
    def from_domain(cls, pr: PullRequest) -> "PullRequestOut":
        return cls(**pr.model_dump())


class TeamResponse(BaseModel):
    team: Team


class UserResponse(BaseModel):
    user: User


class UserReviewsResponse(BaseModel):
    user_id: str
    pull_requests: List[PullRequestShort]


class PRResponse(BaseModel):
    pr: PullRequestOut


class PRReassignResponse(BaseModel):
    pr: PullRequestOut
    replaced_by: str


class ReviewerStatsResponse(BaseModel):
    stats: List[ReviewerStat]


class PRStatsResponse(BaseModel):
    stats: List[PullRequestStat]


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
