"""
Admin authentication endpoints for API v1.

``POST /admin-auth/login`` exchanges the admin email and password for
a bearer token which unlocks ingredient creation, update and deletion.
``GET /admin-auth/logout`` only confirms the logout: tokens are not
tracked on the server, so the client discards its copy.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from pizza_api.app.api.deps import get_session_service
from pizza_api.app.schemas.auth import AdminLogin, StatusMessage, TokenResponse
from pizza_api.app.services.session_service import AdminSessionService, AuthFailure

router = APIRouter()


@router.post("/login", response_model=TokenResponse, summary="Log into the admin panel")
async def login(
    credentials: AdminLogin,
    service: AdminSessionService = Depends(get_session_service),
) -> TokenResponse:
    result = service.login(credentials.email, credentials.password)
    if isinstance(result, AuthFailure):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.reason,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(token=result)


@router.get("/logout", response_model=StatusMessage, summary="Log out")
async def logout(service: AdminSessionService = Depends(get_session_service)) -> StatusMessage:
    service.logout()
    return StatusMessage(status=True, message="Logged out, discard the token")
