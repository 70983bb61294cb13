# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: pull requests and their reviewer links.

Every write is a single transaction. Uniqueness of PR ids, the at-most-once
merge timestamp, and the reviewer swap are enforced here with constraints
and conditional updates rather than read-then-write in the service.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, insert, select, text, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from reviewer_service.models.domain import (
    PRStatus, PullRequest, PullRequestStat, ReviewerStat,
)
from reviewer_service.repositories.errors import (
    PRAlreadyExistsError,
    PRNotFoundError,
    ReviewerAlreadyAssignedError,
    ReviewerLinkNotFoundError,
    is_unique_violation,
)
from reviewer_service.repositories.tables import pr_reviewers, pull_requests, users


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PRRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, pr: PullRequest) -> None:
        """Insert the PR row and its reviewer links (all-or-nothing)."""
        with self._engine.begin() as conn:
            try:
                conn.execute(
                    insert(pull_requests).values(
                        pull_request_id=pr.pull_request_id,
                        pull_request_name=pr.pull_request_name,
                        author_id=pr.author_id,
                        status=pr.status.value,
                        created_at=pr.created_at,
                        merged_at=pr.merged_at,
                    )
                )
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise PRAlreadyExistsError(pr.pull_request_id) from exc
                raise
            if pr.assigned_reviewers:
                conn.execute(
                    insert(pr_reviewers),
                    [
                        {"pr_id": pr.pull_request_id, "reviewer_id": rid, "position": pos}
                        for pos, rid in enumerate(pr.assigned_reviewers)
                    ],
                )

    def merge(self, pr_id: str, merged_at: datetime) -> tuple[datetime, bool]:
        """
        Mark the PR merged. Idempotent: the first stored timestamp wins.
        Returns (persisted merge timestamp, whether this call did the transition).
        """
        with self._engine.begin() as conn:
            result = conn.execute(
                update(pull_requests)
                .where(pull_requests.c.pull_request_id == pr_id)
                .where(pull_requests.c.status != PRStatus.MERGED.value)
                .values(
                    status=PRStatus.MERGED.value,
                    merged_at=func.coalesce(pull_requests.c.merged_at, merged_at),
                )
            )
            stored = conn.execute(
                select(pull_requests.c.merged_at)
                .where(pull_requests.c.pull_request_id == pr_id)
            ).fetchone()
        if stored is None:
            raise PRNotFoundError(pr_id)
        return _as_utc(stored.merged_at), result.rowcount == 1

    def change_reviewer(self, pr_id: str, old_reviewer_id: str, new_reviewer_id: str) -> None:
        """
        Swap one reviewer link. Fails if the (pr, old reviewer) link is gone,
        or if the new reviewer was assigned to the PR by a concurrent swap.
        """
        with self._engine.begin() as conn:
            try:
                result = conn.execute(
                    update(pr_reviewers)
                    .where(pr_reviewers.c.pr_id == pr_id)
                    .where(pr_reviewers.c.reviewer_id == old_reviewer_id)
                    .values(reviewer_id=new_reviewer_id)
                )
            except IntegrityError as exc:
                if is_unique_violation(exc):
                    raise ReviewerAlreadyAssignedError(f"{pr_id}/{new_reviewer_id}") from exc
                raise
        if result.rowcount == 0:
            raise ReviewerLinkNotFoundError(f"{pr_id}/{old_reviewer_id}")

    # ── Read ───────────────────────────────────────────────────────────

    def get_by_id(self, pr_id: str) -> PullRequest:
        with self._engine.connect() as conn:
            row = conn.execute(
                select(pull_requests).where(pull_requests.c.pull_request_id == pr_id)
            ).fetchone()
            if row is None:
                raise PRNotFoundError(pr_id)
            reviewers = self._reviewer_ids(conn, pr_id)
        return PullRequest(
            pull_request_id=row.pull_request_id,
            pull_request_name=row.pull_request_name,
            author_id=row.author_id,
            status=PRStatus(row.status),
            assigned_reviewers=reviewers,
            created_at=_as_utc(row.created_at),
            merged_at=_as_utc(row.merged_at),
        )

    def reviewer_stats(self) -> list[ReviewerStat]:
        assigned_count = func.count().label("assigned_count")
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(pr_reviewers.c.reviewer_id, assigned_count)
                .join(users, users.c.user_id == pr_reviewers.c.reviewer_id)
                .group_by(pr_reviewers.c.reviewer_id)
                .order_by(assigned_count.desc(), pr_reviewers.c.reviewer_id)
            ).fetchall()
        return [ReviewerStat(user_id=r.reviewer_id, assigned_count=r.assigned_count) for r in rows]

    def pull_request_stats(self) -> list[PullRequestStat]:
        reviewer_count = func.count(pr_reviewers.c.reviewer_id).label("reviewer_count")
        with self._engine.connect() as conn:
            rows = conn.execute(
                select(
                    pull_requests.c.pull_request_id,
                    pull_requests.c.pull_request_name,
                    pull_requests.c.author_id,
                    pull_requests.c.status,
                    reviewer_count,
                )
                .select_from(
                    pull_requests.outerjoin(
                        pr_reviewers, pr_reviewers.c.pr_id == pull_requests.c.pull_request_id
                    )
                )
                .group_by(
                    pull_requests.c.pull_request_id,
                    pull_requests.c.pull_request_name,
                    pull_requests.c.author_id,
                    pull_requests.c.status,
                )
                .order_by(pull_requests.c.pull_request_id)
            ).fetchall()
        return [
            PullRequestStat(
                pull_request_id=r.pull_request_id,
                pull_request_name=r.pull_request_name,
                author_id=r.author_id,
                status=PRStatus(r.status),
                reviewer_count=r.reviewer_count,
            )
            for r in rows
        ]

    def verify_connection(self):
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    # ── Private ────────────────────────────────────────────────────────

    @staticmethod
    def _reviewer_ids(conn: Connection, pr_id: str) -> list[str]:
        return list(conn.execute(
            select(pr_reviewers.c.reviewer_id)
            .where(pr_reviewers.c.pr_id == pr_id)
            .order_by(pr_reviewers.c.position)
        ).scalars())
