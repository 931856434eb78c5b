"""Auth Routes — login with per-client rate limiting.

Invariants:
    - Login is limited more strictly than the default (brute-force protection)
    - A successful login opens an access log session whose id is returned to the client
"""

from fastapi import APIRouter, Depends, Request

from aquatour.api.dependencies import get_auth
from aquatour.infrastructure.rate_limiter import LOGIN_LIMIT, limiter
from aquatour.schemas.auth import LoginRequest
from aquatour.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    auth: AuthService = Depends(get_auth),
):
    result = await auth.login(
        body.email,
        body.password,
        ip_address=request.client.host if request.client else None,
        browser=body.browser or request.headers.get("user-agent"),
        operating_system=body.operating_system,
    )
    return {"ok": True, **result}
