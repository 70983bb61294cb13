# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: User activity flag and review load.
"""

from reviewer_service.core.logging import get_logger
from reviewer_service.models.domain import PullRequestShort, User
from reviewer_service.models.errors import DomainError
from reviewer_service.repositories.errors import UserNotFoundError
from reviewer_service.repositories.user_repository import UserRepository

logger = get_logger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository) -> None:
        self._users = user_repo

    def set_is_active(self, user_id: str, is_active: bool) -> User:
        """Toggle review eligibility. Existing assignments are left as they are."""
        try:
            self._users.set_is_active(user_id, is_active)
            user = self._users.get_by_id(user_id)
        except UserNotFoundError:
            logger.warning("user not found user_id=%s", user_id)
            raise DomainError.not_found()
        logger.info("User activity changed user_id=%s is_active=%s", user_id, is_active)
        return user

    def get_review_prs(self, user_id: str) -> list[PullRequestShort]:
        try:
            self._users.get_by_id(user_id)
        except UserNotFoundError:
            logger.warning("user not found user_id=%s", user_id)
            raise DomainError.not_found()
        return self._users.get_review_prs(user_id)
