# ghdash/api/session_routes.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ghdash.api.deps import get_session_service, to_http_error
from ghdash.core.errors import GHDashError
from ghdash.schemas import UserProfile
from ghdash.services.session_service import SessionService

router = APIRouter(prefix="/session", tags=["session"])


class TokenIn(BaseModel):
    token: str


class TokenOut(BaseModel):
    token: str


@router.put("/token", response_model=UserProfile)
async def set_token(payload: TokenIn, sessions: SessionService = Depends(get_session_service)):
    if not payload.token.strip():
        raise HTTPException(status_code=400, detail="Token must not be empty")
    try:
        return await sessions.set_active_token(payload.token.strip())
    except GHDashError as e:
        raise to_http_error(e) from e


@router.get("/token", response_model=TokenOut)
def get_token(sessions: SessionService = Depends(get_session_service)):
    try:
        return {"token": sessions.get_active_token()}
    except GHDashError as e:
        raise to_http_error(e) from e


@router.delete("/token")
def clear_token(sessions: SessionService = Depends(get_session_service)):
    try:
        removed = sessions.clear_active_token()
    except GHDashError as e:
        raise to_http_error(e) from e
    return {"ok": True, "removed": removed}


@router.get("/user", response_model=UserProfile)
def current_user(sessions: SessionService = Depends(get_session_service)):
    try:
        return sessions.get_current_user()
    except GHDashError as e:
        raise to_http_error(e) from e
