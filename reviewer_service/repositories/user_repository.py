# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for users and their review load."""
from sqlalchemy import select, update
from sqlalchemy.engine import Engine

from reviewer_service.models.domain import PRStatus, PullRequestShort, User
from reviewer_service.repositories.errors import UserNotFoundError
from reviewer_service.repositories.tables import pr_reviewers, pull_requests, users


class UserRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def get_by_id(self, user_id: str) -> User:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(users.c.user_id, users.c.username, users.c.team_name, users.c.is_active)
                .where(users.c.user_id == user_id)
            ).fetchone()
        if row is None:
            raise UserNotFoundError(user_id)
        return User(
            user_id=row.user_id,
            username=row.username,
            team_name=row.team_name,
            is_active=row.is_active,
        )

    def set_is_active(self, user_id: str, is_active: bool) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(
                update(users)
                .where(users.c.user_id == user_id)
                .values(is_active=is_active)
            )
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)

    def get_review_prs(self, user_id: str) -> list[PullRequestShort]:
        """PRs on which the user is currently an assigned reviewer."""
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(
                    pull_requests.c.pull_request_id,
                    pull_requests.c.pull_request_name,
                    pull_requests.c.author_id,
                    pull_requests.c.status,
                )
                .join(pr_reviewers, pr_reviewers.c.pr_id == pull_requests.c.pull_request_id)
                .where(pr_reviewers.c.reviewer_id == user_id)
                .order_by(pull_requests.c.created_at, pull_requests.c.pull_request_id)
            ).fetchall()
        return [
            PullRequestShort(
                pull_request_id=r.pull_request_id,
                pull_request_name=r.pull_request_name,
                author_id=r.author_id,
                status=PRStatus(r.status),
            )
            for r in rows
        ]
