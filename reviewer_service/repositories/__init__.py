# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package; re-exports the store classes."""
from reviewer_service.repositories.pr_repository import PRRepository
from reviewer_service.repositories.team_repository import TeamRepository
from reviewer_service.repositories.user_repository import UserRepository

__all__ = ["PRRepository", "TeamRepository", "UserRepository"]
