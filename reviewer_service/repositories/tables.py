# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Table definitions shared by all repositories."""
from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, MetaData, String, Table,
)

metadata = MetaData()

teams = Table(
    "teams", metadata,
    Column("team_name", String(255), primary_key=True),
)

users = Table(
    "users", metadata,
    Column("user_id", String(255), primary_key=True),
    Column("username", String(255), nullable=False),
    Column("team_name", String(255), ForeignKey("teams.team_name"), nullable=False, index=True),
    Column("is_active", Boolean, nullable=False),
)

pull_requests = Table(
    "pull_requests", metadata,
    Column("pull_request_id", String(255), primary_key=True),
    Column("pull_request_name", String(500), nullable=False),
    Column("author_id", String(255), ForeignKey("users.user_id"), nullable=False),
    Column("status", String(16), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("merged_at", DateTime(timezone=True), nullable=True),
)

pr_reviewers = Table(
    "pr_reviewers", metadata,
    Column("pr_id", String(255),
           ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
           primary_key=True),
    Column("reviewer_id", String(255), ForeignKey("users.user_id"),
           primary_key=True, index=True),
    # slot index, keeps reviewer order stable across swaps
    Column("position", Integer, nullable=False),
)


def create_schema(engine) -> None:
    metadata.create_all(engine)
