"""Auth API: email/password login issuing a JWT bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from portfolio.api.v1.dependencies import get_auth_provider
from portfolio.application.services import envelope as envelopes
from portfolio.core.exception_handlers import envelope_response
from portfolio.core.limiter import limit_auth
from portfolio.infrastructure.security.auth_provider import JwtAuthProvider
from portfolio.schemas.auth import LoginRequest, TokenResponse

router = APIRouter()


@router.post("/login")
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth: Annotated[JwtAuthProvider, Depends(get_auth_provider)],
) -> JSONResponse:
    """Exchange email and password for an access token.

    Unknown email and wrong password return the same 401 envelope.
    """
    try:
        token, expires_in = await auth.login(body.email, body.password)
    except Exception as exc:
        return envelope_response(envelopes.classify_exception(exc, "login"))
    payload = TokenResponse(access_token=token, expires_in=expires_in)
    return envelope_response(envelopes.success(payload.model_dump()))
