# ghdash/api/pull_routes.py
from fastapi import APIRouter, Depends

from ghdash.api.deps import get_pull_request_service, get_session_service, to_http_error
from ghdash.core.errors import GHDashError
from ghdash.schemas import PullRequestEntry
from ghdash.services.pull_request_service import PullRequestService
from ghdash.services.session_service import SessionService

router = APIRouter(prefix="/pulls", tags=["pulls"])


@router.get("", response_model=list[PullRequestEntry])
async def list_pulls(sessions: SessionService = Depends(get_session_service)):
    try:
        return await sessions.fetch_pull_requests()
    except GHDashError as e:
        raise to_http_error(e) from e


@router.post("/sync", response_model=list[PullRequestEntry])
async def sync_pulls(pulls: PullRequestService = Depends(get_pull_request_service)):
    try:
        return await pulls.sync_pull_requests()
    except GHDashError as e:
        raise to_http_error(e) from e


@router.get("/cached", response_model=list[PullRequestEntry])
def cached_pulls(pulls: PullRequestService = Depends(get_pull_request_service)):
    try:
        return pulls.list_cached_pull_requests()
    except GHDashError as e:
        raise to_http_error(e) from e


@router.post("/{issue_id}/viewed")
def mark_viewed(issue_id: int, pulls: PullRequestService = Depends(get_pull_request_service)):
    try:
        found = pulls.mark_viewed(issue_id)
    except GHDashError as e:
        raise to_http_error(e) from e
    return {"ok": found, "issue_id": issue_id}
