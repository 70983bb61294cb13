# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: user activity flag and review load."""

from fastapi import APIRouter, Depends, Query

from reviewer_service.core.dependencies import get_user_service
from reviewer_service.schemas import SetIsActiveRequest, UserResponse, UserReviewsResponse
from reviewer_service.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/setIsActive", response_model=UserResponse)
def set_is_active(body: SetIsActiveRequest, service: UserService = Depends(get_user_service)):
    return UserResponse(user=service.set_is_active(body.user_id, body.is_active))


@router.get("/getReview", response_model=UserReviewsResponse)
def get_review(
    user_id: str = Query(..., min_length=1, description="Reviewer id"),
    service: UserService = Depends(get_user_service),
):
    """PRs where the user is an assigned reviewer."""
    return UserReviewsResponse(user_id=user_id, pull_requests=service.get_review_prs(user_id))
