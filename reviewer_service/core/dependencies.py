# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection: wire repositories and services.
"""

from reviewer_service.core.database import engine
from reviewer_service.repositories.pr_repository import PRRepository
from reviewer_service.repositories.team_repository import TeamRepository
from reviewer_service.repositories.user_repository import UserRepository
from reviewer_service.services.assignment import RandomReviewerPicker
from reviewer_service.services.pr_service import PRService
from reviewer_service.services.stats_service import StatsService
from reviewer_service.services.team_service import TeamService
from reviewer_service.services.user_service import UserService

# ── Singleton repository instances (share one pooled engine) ──
_team_repo = TeamRepository(engine)
_user_repo = UserRepository(engine)
_pr_repo = PRRepository(engine)

# ── Process-wide random source for reviewer selection ──
_picker = RandomReviewerPicker()

# ── Service instances (with injected dependencies) ──
_team_service = TeamService(team_repo=_team_repo)
_user_service = UserService(user_repo=_user_repo)
_pr_service = PRService(
    pr_repo=_pr_repo,
    team_repo=_team_repo,
    user_repo=_user_repo,
    picker=_picker,
)
_stats_service = StatsService(pr_repo=_pr_repo)


# ── FastAPI dependency functions ──
def get_team_service() -> TeamService:
    return _team_service


def get_user_service() -> UserService:
    return _user_service


def get_pr_service() -> PRService:
    return _pr_service


def get_stats_service() -> StatsService:
    return _stats_service


def get_pr_repo() -> PRRepository:
    return _pr_repo
