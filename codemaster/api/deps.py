"""API dependencies - authentication, authorization and request context"""

from dataclasses import dataclass
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from codemaster.config import settings
from codemaster.core.database import get_db
from codemaster.core.security import decode_access_token
from codemaster.core.exceptions import AuthenticationError, AuthorizationError
from codemaster.models.user import User
from codemaster.services.user_service import user_service

# HTTP Bearer token scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Authenticated caller identity handed explicitly to route handlers"""
    user: User
    request_id: str
    client_ip: str

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.user.role == "admin"


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _resolve_user(db: Session, token: str) -> User:
    payload = decode_access_token(token)
    if not payload:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token payload")

    try:
        user = user_service.get_user_by_id(db, int(user_id))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")
    if not user:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is disabled")

    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token

    Raises:
        AuthenticationError: If token is missing, invalid or user not found
    """
    if not credentials:
        raise AuthenticationError("Not authorized, no token")
    return _resolve_user(db, credentials.credentials)


async def get_request_context(
    request: Request,
    current_user: User = Depends(get_current_user)
) -> RequestContext:
    """Build the explicit context for an authenticated request"""
    return RequestContext(
        user=current_user,
        request_id=getattr(request.state, "request_id", ""),
        client_ip=_client_ip(request),
    )


async def get_admin_context(
    ctx: RequestContext = Depends(get_request_context)
) -> RequestContext:
    """
    Request context for admin-only routes

    Raises:
        AuthorizationError: If user is not admin
    """
    if not ctx.is_admin:
        raise AuthorizationError("Admin access required")
    return ctx


async def get_optional_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[RequestContext]:
    """Context if a valid bearer token was sent, None otherwise"""
    if not credentials:
        return None
    try:
        user = _resolve_user(db, credentials.credentials)
    except AuthenticationError:
        return None
    return RequestContext(
        user=user,
        request_id=getattr(request.state, "request_id", ""),
        client_ip=_client_ip(request),
    )


async def require_seed_access(
    ctx: Optional[RequestContext] = Depends(get_optional_context)
) -> Optional[RequestContext]:
    """Catalog seeding is public in development, admin-only otherwise"""
    if settings.ALLOW_PUBLIC_STORE_SEED:
        return ctx
    if ctx is None:
        raise AuthenticationError("Not authorized, no token")
    if not ctx.is_admin:
        raise AuthorizationError("Admin access required")
    return ctx
