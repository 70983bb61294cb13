# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team creation and lookup.
"""

from reviewer_service.core.logging import get_logger
from reviewer_service.metrics.prometheus import TEAMS_CREATED
from reviewer_service.models.domain import Team
from reviewer_service.models.errors import DomainError, ErrorCode
from reviewer_service.repositories.errors import TeamAlreadyExistsError, TeamNotFoundError
from reviewer_service.repositories.team_repository import TeamRepository

logger = get_logger(__name__)


class TeamService:
    """Business logic for teams."""

    def __init__(self, team_repo: TeamRepository) -> None:
        self._teams = team_repo

    def create_team(self, team: Team) -> Team:
        """
        Create a team and upsert its members.
        Duplicate member ids are rejected before anything is written.
        """
        seen: set[str] = set()
        for member in team.members:
            if member.user_id in seen:
                logger.warning("duplicate member in team request team=%s user_id=%s",
                               team.team_name, member.user_id)
                raise DomainError(ErrorCode.BAD_REQUEST, f"duplicate user {member.user_id}")
            seen.add(member.user_id)

        try:
            self._teams.create_with_members(team)
        except TeamAlreadyExistsError:
            logger.warning("team already exists team=%s", team.team_name)
            raise DomainError(ErrorCode.TEAM_EXISTS, "team_name already exists")
        except Exception:
            logger.error("failed to create team team=%s", team.team_name, exc_info=True)
            raise

        TEAMS_CREATED.inc()
        logger.info("Team created team=%s members=%d", team.team_name, len(team.members))
        return team

    def get_team(self, team_name: str) -> Team:
        try:
            return self._teams.get_by_name(team_name)
        except TeamNotFoundError:
            logger.warning("team not found team=%s", team_name)
            raise DomainError.not_found()
