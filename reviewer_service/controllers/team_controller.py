# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: team creation and lookup."""

from fastapi import APIRouter, Depends, Query

from reviewer_service.core.dependencies import get_team_service
from reviewer_service.models.domain import Team
from reviewer_service.schemas import TeamCreate, TeamResponse
from reviewer_service.services.team_service import TeamService

router = APIRouter(prefix="/team", tags=["Teams"])


@router.post("/add", status_code=201, response_model=TeamResponse)
def add_team(body: TeamCreate, service: TeamService = Depends(get_team_service)):
    """Create a team; members are created or moved into it."""
    return TeamResponse(team=service.create_team(body.to_domain()))


@router.get("/get", response_model=Team)
def get_team(
    team_name: str = Query(..., min_length=1, description="Team name to query"),
    service: TeamService = Depends(get_team_service),
):
    return service.get_team(team_name)
