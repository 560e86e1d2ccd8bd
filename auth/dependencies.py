"""
auth/dependencies.py -- FastAPI Depends() helpers for bearer authentication.

Clients send the token returned by POST /users/login as
    Authorization: Bearer <token>

The token is verified with the same TokenIssuer (same secret, same HS256
algorithm) that signed it. Bad signatures and expired tokens are rejected.
The subject claim is then resolved to a stored User, so a token for a
phone number that no longer exists is also rejected.

try_get_current_user() is the soft variant (returns None on failure).
get_current_user() wraps it and raises HTTP 401 if unauthenticated.

auth/dependencies.py may import from fastapi (for HTTPException/Request)
because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.models import User


def try_get_current_user(request: Request) -> User | None:
    """Authenticate the request via its Bearer header. Never raises."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header[7:]

    payload = request.app.state.token_issuer.decode(token)
    if payload is None:
        return None
    return request.app.state.user_store.get_by_phone(payload["sub"])


def get_current_user(request: Request) -> User:
    """Require authentication. Raises HTTP 401 if the request is not authenticated.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: User = Depends(get_current_user)): ...
    """
    user = try_get_current_user(request)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail={"code": "unauthorized", "message": "Authentication required.", "detail": None},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
