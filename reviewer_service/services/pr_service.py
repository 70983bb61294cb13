# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Pull request lifecycle and reviewer assignment.

    create  ─► OPEN (0–2 reviewers from the author's team)
    reassign (OPEN only) swaps exactly one reviewer
    merge   ─► MERGED (terminal, idempotent)

Holds no per-request state; one instance is shared by all handlers.
Races on the same PR are settled by the store (unique id, conditional
merge, conditional reviewer swap), never by a pre-check here.
"""

from datetime import datetime, timezone
from typing import Optional

from reviewer_service.core.config import settings
from reviewer_service.core.logging import get_logger
from reviewer_service.metrics.prometheus import (
    PRS_CREATED,
    PRS_MERGED,
    REVIEWER_REASSIGNMENTS,
    REVIEWERS_ASSIGNED,
)
from reviewer_service.models.domain import PRStatus, PullRequest
from reviewer_service.models.errors import DomainError, ErrorCode
from reviewer_service.repositories.errors import (
    NotFoundError,
    PRAlreadyExistsError,
    PRNotFoundError,
    ReviewerAlreadyAssignedError,
    TeamNotFoundError,
    UserNotFoundError,
)
from reviewer_service.repositories.pr_repository import PRRepository
from reviewer_service.repositories.team_repository import TeamRepository
from reviewer_service.repositories.user_repository import UserRepository
from reviewer_service.services.assignment import RandomReviewerPicker, ReviewerPicker

logger = get_logger(__name__)

# upper bound on reviewers per PR, whatever MAX_REVIEWERS says
REVIEWER_LIMIT = 2


class PRService:
    """Business logic for creating, merging and reassigning pull requests."""

    def __init__(
        self,
        pr_repo: PRRepository,
        team_repo: TeamRepository,
        user_repo: UserRepository,
        picker: Optional[ReviewerPicker] = None,
        max_reviewers: int = settings.MAX_REVIEWERS,
    ) -> None:
        self._prs = pr_repo
        self._teams = team_repo
        self._users = user_repo
        self._picker = picker or RandomReviewerPicker()
        self._max_reviewers = max(0, min(max_reviewers, REVIEWER_LIMIT))

    # ── Create ──

    def create_pull_request(self, pr_id: str, pr_name: str, author_id: str) -> PullRequest:
        """
        Create an OPEN pull request and assign up to two active reviewers
        from the author's team. Raises DomainError NOT_FOUND / PR_EXISTS.
        """
        try:
            self._users.get_by_id(author_id)
        except UserNotFoundError:
            logger.warning("PR author not found author_id=%s", author_id)
            raise DomainError.not_found()

        try:
            team = self._teams.get_by_user_id(author_id)
        except TeamNotFoundError:
            logger.warning("team of PR author not found author_id=%s", author_id)
            raise DomainError.not_found()

        candidates = team.active_member_ids(author_id)
        reviewers = self._picker.pick_reviewers(candidates, self._max_reviewers)

        pr = PullRequest(
            pull_request_id=pr_id,
            pull_request_name=pr_name,
            author_id=author_id,
            status=PRStatus.OPEN,
            assigned_reviewers=reviewers,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self._prs.create(pr)
        except PRAlreadyExistsError:
            logger.warning("PR already exists pr_id=%s", pr_id)
            raise DomainError(ErrorCode.PR_EXISTS, "PR id already exists")
        except Exception:
            logger.error("failed to create PR pr_id=%s", pr_id, exc_info=True)
            raise

        PRS_CREATED.inc()
        REVIEWERS_ASSIGNED.observe(len(reviewers))
        logger.info("PR created pr_id=%s author=%s team=%s reviewers=%s",
                    pr_id, author_id, team.team_name, reviewers)
        return pr

    # ── Merge ──

    def merge_pull_request(self, pr_id: str) -> PullRequest:
        """Mark a PR merged. Merging an already merged PR returns it unchanged."""
        pr = self._load(pr_id)

        if pr.is_merged:
            logger.warning("PR already merged pr_id=%s", pr_id)
            return pr

        try:
            merged_at, transitioned = self._prs.merge(pr_id, datetime.now(timezone.utc))
        except PRNotFoundError:
            logger.warning("PR vanished before merge pr_id=%s", pr_id)
            raise DomainError.not_found()
        except Exception:
            logger.error("failed to merge PR pr_id=%s", pr_id, exc_info=True)
            raise

        pr.status = PRStatus.MERGED
        pr.merged_at = merged_at
        if transitioned:
            PRS_MERGED.inc()
            logger.info("PR merged merged_at=%s", merged_at.isoformat(), extra={"pr_id": pr_id})
        else:
            logger.warning("PR merged concurrently by another request", extra={"pr_id": pr_id})
        return pr

    # ── Reassign ──

    def reassign_reviewer(self, pr_id: str, old_reviewer_id: str) -> tuple[PullRequest, str]:
        """
        Replace one assigned reviewer with another active member of the
        outgoing reviewer's team. Returns (updated PR, new reviewer id).
        Raises DomainError NOT_FOUND / PR_MERGED / NOT_ASSIGNED / NO_CANDIDATE.
        """
        pr = self._load(pr_id)

        if pr.is_merged:
            logger.warning("cannot reassign reviewer on merged PR pr_id=%s", pr_id)
            REVIEWER_REASSIGNMENTS.labels(outcome="merged").inc()
            raise DomainError(ErrorCode.PR_MERGED, "cannot reassign on merged PR")

        if not pr.has_reviewer(old_reviewer_id):
            logger.warning("reviewer not assigned pr_id=%s reviewer_id=%s", pr_id, old_reviewer_id)
            REVIEWER_REASSIGNMENTS.labels(outcome="not_assigned").inc()
            raise DomainError(ErrorCode.NOT_ASSIGNED, "reviewer is not assigned to this PR")

        try:
            team = self._teams.get_by_user_id(old_reviewer_id)
        except TeamNotFoundError:
            logger.warning("team of reviewer not found reviewer_id=%s", old_reviewer_id)
            raise DomainError.not_found()
        except Exception:
            logger.error("failed to get reviewer's team reviewer_id=%s", old_reviewer_id, exc_info=True)
            raise

        candidates = team.active_member_ids(pr.author_id, old_reviewer_id)
        candidates -= set(pr.assigned_reviewers)

        new_reviewer_id = self._picker.pick_replacement(candidates)
        if new_reviewer_id is None:
            logger.warning("no replacement candidate pr_id=%s old_reviewer_id=%s",
                           pr_id, old_reviewer_id)
            REVIEWER_REASSIGNMENTS.labels(outcome="no_candidate").inc()
            raise DomainError(ErrorCode.NO_CANDIDATE, "no active replacement candidate in team")

        try:
            self._prs.change_reviewer(pr_id, old_reviewer_id, new_reviewer_id)
        except NotFoundError:
            logger.warning("reviewer link vanished reviewer_id=%s", old_reviewer_id,
                           extra={"pr_id": pr_id})
            raise DomainError.not_found()
        except ReviewerAlreadyAssignedError:
            logger.warning("replacement taken by a concurrent reassign new_reviewer_id=%s",
                           new_reviewer_id, extra={"pr_id": pr_id})
            REVIEWER_REASSIGNMENTS.labels(outcome="no_candidate").inc()
            raise DomainError(ErrorCode.NO_CANDIDATE, "no active replacement candidate in team")
        except Exception:
            logger.error("failed to reassign reviewer pr_id=%s", pr_id, exc_info=True)
            raise

        pr.replace_reviewer(old_reviewer_id, new_reviewer_id)
        REVIEWER_REASSIGNMENTS.labels(outcome="reassigned").inc()
        logger.info("reviewer reassigned old=%s new=%s", old_reviewer_id, new_reviewer_id,
                    extra={"pr_id": pr_id})
        return pr, new_reviewer_id

    # ── Private ──

    def _load(self, pr_id: str) -> PullRequest:
        try:
            return self._prs.get_by_id(pr_id)
        except PRNotFoundError:
            logger.warning("PR not found pr_id=%s", pr_id)
            raise DomainError.not_found()
        except Exception:
            logger.error("failed to get PR pr_id=%s", pr_id, exc_info=True)
            raise
