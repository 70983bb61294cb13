# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: assignment statistics."""

from fastapi import APIRouter, Depends

from reviewer_service.core.dependencies import get_stats_service
from reviewer_service.schemas import PRStatsResponse, ReviewerStatsResponse
from reviewer_service.services.stats_service import StatsService

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/reviewers", response_model=ReviewerStatsResponse)
def reviewer_stats(service: StatsService = Depends(get_stats_service)):
    return ReviewerStatsResponse(stats=service.reviewer_stats())


@router.get("/pullRequests", response_model=PRStatsResponse)
def pull_request_stats(service: StatsService = Depends(get_stats_service)):
    return PRStatsResponse(stats=service.pull_request_stats())
