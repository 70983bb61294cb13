# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Service: assignment statistics."""

from reviewer_service.models.domain import PullRequestStat, ReviewerStat
from reviewer_service.repositories.pr_repository import PRRepository


class StatsService:
    def __init__(self, pr_repo: PRRepository) -> None:
        self._prs = pr_repo

    def reviewer_stats(self) -> list[ReviewerStat]:
        return self._prs.reviewer_stats()

    def pull_request_stats(self) -> list[PullRequestStat]:
        return self._prs.pull_request_stats()
