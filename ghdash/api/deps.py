# ghdash/api/deps.py
from fastapi import HTTPException, Request

from ghdash.core.errors import (
    BadCredentialError,
    GHDashError,
    StorageError,
    TokenNotFoundError,
    UnknownError,
    UserNotSetError,
)
from ghdash.services.pull_request_service import PullRequestService
from ghdash.services.session_service import SessionService

_STATUS_BY_ERROR = [
    (TokenNotFoundError, 404),
    (UserNotSetError, 404),
    (BadCredentialError, 401),
    (UnknownError, 502),
    (StorageError, 500),
]


def get_session_service(request: Request) -> SessionService:
    return request.app.state.sessions


def get_pull_request_service(request: Request) -> PullRequestService:
    return request.app.state.pulls


def to_http_error(err: GHDashError) -> HTTPException:
    for kind, status in _STATUS_BY_ERROR:
        if isinstance(err, kind):
            return HTTPException(status_code=status, detail=str(err))
    return HTTPException(status_code=500, detail=str(err))
