"""Authentication routes"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from codemaster.core.database import get_db
from codemaster.config import settings
from codemaster.core.security import create_access_token
from codemaster.models.user import User
from codemaster.schemas.user import (
    UserSignup,
    UserLogin,
    TokenResponse,
    UserResponse,
    UserProfileResponse,
    AddPointsRequest,
    PointsResponse,
)
from codemaster.services.user_service import user_service
from codemaster.services.ledger_service import ledger_service, parse_point_amount
from codemaster.services.rate_limiter import rate_limiter
from codemaster.api.deps import RequestContext, get_request_context

router = APIRouter()


def _token_response(user: User) -> TokenResponse:
    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return TokenResponse(
        token=token,
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user),
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Register a new user and return a bearer token

    Args:
        user_data: Username, email, password and optional role
        db: Database session

    Returns:
        Token and user info
    """
    client_ip = request.client.host if request.client else "unknown"
    rate_limiter.enforce(
        f"signup:{client_ip}",
        [(settings.SIGNUP_RATE_LIMIT_PER_HOUR, 3600, "Too many signups. Please try again later.")],
    )

    user = user_service.create_user(db, user_data)
    return _token_response(user)


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
def login(
    credentials: UserLogin,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Login endpoint - authenticate user and return JWT token

    Args:
        credentials: Email and password
        db: Database session

    Returns:
        JWT token and user info
    """
    client_ip = request.client.host if request.client else "unknown"
    rate_limiter.enforce(
        f"login:{client_ip}:{credentials.email}",
        [
            (settings.LOGIN_RATE_LIMIT_PER_MINUTE, 60, "Too many login attempts. Please wait a minute."),
            (settings.LOGIN_RATE_LIMIT_PER_HOUR, 3600, "Too many login attempts. Please try again later."),
        ],
    )

    user = user_service.authenticate_user(db, credentials.email, credentials.password, ip_address=client_ip)
    return _token_response(user)


@router.get("/me", response_model=UserProfileResponse)
def get_current_user_info(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Current user profile with inventory and login history"""
    return user_service.get_profile(db, ctx.user_id)


@router.post("/add-points", response_model=PointsResponse)
def add_points(
    body: AddPointsRequest,
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """
    Credit points to the caller (lesson completion, quiz pass, ...)

    Args:
        body: Amount and reason
        ctx: Request context
        db: Database session

    Returns:
        Updated balance
    """
    amount = parse_point_amount(body.points)
    balance = ledger_service.award_points(db, ctx.user_id, amount, body.reason)
    return PointsResponse(
        id=ctx.user_id,
        username=ctx.user.username,
        points=balance,
        message=f"Added {amount} points",
    )
