"""User and ledger schemas"""

from pydantic import Field, field_validator
from typing import Any, Optional, List
from datetime import datetime
from enum import Enum

from codemaster.schemas.response import CamelModel
from codemaster.schemas.store import InventoryEntryResponse

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "admin"
    USER = "user"


class UserSignup(CamelModel):
    """User registration schema"""
    username: str = Field(..., min_length=3, max_length=50, pattern=r'^[a-zA-Z0-9_-]+$')
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)
    role: Optional[UserRole] = None

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Emails are compared case-insensitively"""
        return v.strip().lower()


class UserLogin(CamelModel):
    """User login schema"""
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserResponse(CamelModel):
    """User response schema"""
    id: int
    username: str
    email: str
    role: str
    points: int
    is_active: bool
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class UserProfileResponse(UserResponse):
    """Caller profile with progression details"""
    solved_count: int = 0
    inventory: List[InventoryEntryResponse] = []
    login_history: List[datetime] = []


class TokenResponse(CamelModel):
    """Signup/login response: user plus bearer token"""
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class AddPointsRequest(CamelModel):
    """Manual credit, e.g. lesson completion or quiz pass"""
    # Raw value; the ledger validates the amount and reports InvalidInput.
    points: Any = None
    reason: str = Field("manual", min_length=1, max_length=64)


class PointsResponse(CamelModel):
    """Balance after a credit"""
    id: int
    username: str
    points: int
    message: str


class PointEventResponse(CamelModel):
    """One balance change"""
    id: int
    delta: int
    reason: str
    reference: Optional[str] = None
    balance_after: int
    created_at: Optional[datetime] = None


class UserListItem(CamelModel):
    """Admin user listing entry"""
    id: int
    username: str
    email: str
    role: str
    points: int
    is_active: bool
    last_login: Optional[datetime] = None

