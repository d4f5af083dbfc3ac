import logging
from typing import Any, Awaitable, Callable

import httpx
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Public paths that don't require auth
PUBLIC_PATHS = {
    "/health",
    "/docs",
    "/openapi.json",
}

TokenVerifier = Callable[[str], Awaitable[dict[str, Any]]]


class TokenRejected(Exception):
    pass


def _is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS


def http_token_verifier(auth_service_url: str, timeout: float = 5.0) -> TokenVerifier:
    """
    Verify bearer tokens against the identity service.
    Expected reply: {"sub": ..., "role": ...} (optionally wrapped in "user").
    """
    async def verify(token: str) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(f"{auth_service_url}/auth/verify", json={"token": token})

        if r.status_code != 200:
            raise TokenRejected("Invalid or expired token")

        payload = r.json()
        if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
            payload = payload["user"]
        if not isinstance(payload, dict) or not payload.get("sub"):
            raise TokenRejected("Token missing sub")

        return {"sub": str(payload["sub"]), "role": str(payload.get("role") or "")}

    return verify


def build_auth_middleware(verify_token: TokenVerifier):
    async def auth_middleware(request: Request, call_next):
        if request.method == "OPTIONS" or _is_public_path(request.url.path):
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")
        if not auth_header.lower().startswith("bearer "):
            return JSONResponse(status_code=401, content={"detail": "Missing Bearer token"})

        token = auth_header.split(" ", 1)[1].strip()
        if not token:
            return JSONResponse(status_code=401, content={"detail": "Missing token"})

        try:
            request.state.user = await verify_token(token)
        except TokenRejected as e:
            return JSONResponse(status_code=401, content={"detail": str(e)})
        except httpx.RequestError as e:
            logger.error("Auth service error: %s", e)
            return JSONResponse(status_code=503, content={"detail": "Auth service unavailable"})

        return await call_next(request)

    return auth_middleware


def current_user_id(request: Request) -> int:
    # set by auth_middleware
    user = getattr(request.state, "user", None)
    if not user or "sub" not in user:
        raise HTTPException(401, "Not authenticated")
    return int(user["sub"])
