# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: pull request create / merge / reassign.
Thin HTTP layer; DomainErrors propagate to the app-level handler.
"""

from fastapi import APIRouter, Depends

from reviewer_service.core.dependencies import get_pr_service
from reviewer_service.schemas import (
    PRCreate, PRMerge, PRReassign, PRReassignResponse, PRResponse, PullRequestOut,
)
from reviewer_service.services.pr_service import PRService

router = APIRouter(prefix="/pullRequest", tags=["Pull Requests"])


@router.post("/create", status_code=201, response_model=PRResponse,
             response_model_exclude_none=True)
def create_pull_request(body: PRCreate, service: PRService = Depends(get_pr_service)):
    """Create a PR and auto-assign up to two reviewers from the author's team."""
    pr = service.create_pull_request(body.pull_request_id, body.pull_request_name, body.author_id)
    return PRResponse(pr=PullRequestOut.from_domain(pr))


@router.post("/merge", response_model=PRResponse, response_model_exclude_none=True)
def merge_pull_request(body: PRMerge, service: PRService = Depends(get_pr_service)):
    """Mark a PR as merged (idempotent)."""
    pr = service.merge_pull_request(body.pull_request_id)
    return PRResponse(pr=PullRequestOut.from_domain(pr))


@router.post("/reassign", response_model=PRReassignResponse, response_model_exclude_none=True)
def reassign_reviewer(body: PRReassign, service: PRService = Depends(get_pr_service)):
    """Swap one reviewer for another active member of that reviewer's team."""
    pr, new_reviewer_id = service.reassign_reviewer(body.pull_request_id, body.old_reviewer_id)
    return PRReassignResponse(pr=PullRequestOut.from_domain(pr), replaced_by=new_reviewer_id)
