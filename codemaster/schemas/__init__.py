"""Pydantic schemas for API validation"""

from codemaster.schemas.user import (
    UserSignup,
    UserLogin,
    UserResponse,
    UserProfileResponse,
    TokenResponse,
    AddPointsRequest,
    PointsResponse,
    PointEventResponse,
)
from codemaster.schemas.store import (
    StoreItemResponse,
    PurchaseRequest,
    PurchaseResponse,
    InventoryEntryResponse,
    SeedResponse,
)
from codemaster.schemas.problem import ProblemCreate, ProblemUpdate, ProblemResponse, ProblemSummary
from codemaster.schemas.submission import SubmissionCreate, SubmissionResponse, SubmissionHistoryItem
from codemaster.schemas.contest import ContestCreate, ContestResponse, ContestDetailResponse
from codemaster.schemas.leaderboard import LeaderboardEntry
from codemaster.schemas.audit import AuditEventResponse, DashboardStats
from codemaster.schemas.response import CamelModel, MessageResponse, ErrorResponse

__all__ = [
    "UserSignup", "UserLogin", "UserResponse", "UserProfileResponse", "TokenResponse",
    "AddPointsRequest", "PointsResponse", "PointEventResponse",
    "StoreItemResponse", "PurchaseRequest", "PurchaseResponse", "InventoryEntryResponse", "SeedResponse",
    "ProblemCreate", "ProblemUpdate", "ProblemResponse", "ProblemSummary",
    "SubmissionCreate", "SubmissionResponse", "SubmissionHistoryItem",
    "ContestCreate", "ContestResponse", "ContestDetailResponse",
    "LeaderboardEntry",
    "AuditEventResponse", "DashboardStats",
    "CamelModel", "MessageResponse", "ErrorResponse",
]
