"""Custom exception classes for the application"""

from typing import Optional, Dict, Any


class BaseAPIException(Exception):
    """Base exception for all API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# Authentication Errors
class AuthenticationError(BaseAPIException):
    """Base authentication error"""
    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=401, details=details)


class InvalidCredentialsError(AuthenticationError):
    """Invalid email or password"""
    def __init__(self):
        super().__init__("Invalid email or password")


class AccountLockedError(AuthenticationError):
    """Account is locked due to failed login attempts"""
    def __init__(self, locked_until: str):
        super().__init__(
            f"Account is locked until {locked_until}",
            details={"locked_until": locked_until}
        )


# Authorization Errors
class AuthorizationError(BaseAPIException):
    """Insufficient permissions"""
    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message, status_code=403)


# Resource Errors
class ResourceNotFoundError(BaseAPIException):
    """Resource not found"""
    def __init__(self, resource: str):
        super().__init__(f"{resource} not found", status_code=404)


class ResourceAlreadyExistsError(BaseAPIException):
    """Resource already exists"""
    def __init__(self, resource: str, message: Optional[str] = None):
        super().__init__(message or f"{resource} already exists", status_code=409)


# Business Logic Errors
class BusinessLogicError(BaseAPIException):
    """Business logic error"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class InvalidInputError(BusinessLogicError):
    """Malformed input that passed schema validation"""


class InsufficientFundsError(BusinessLogicError):
    """Purchase price exceeds the user's point balance"""
    def __init__(self, balance: int, price: int):
        super().__init__(
            "Not enough points",
            details={"balance": balance, "price": price}
        )


# System Errors
class RateLimitExceededError(BaseAPIException):
    """Rate limit exceeded"""
    def __init__(self, message: str = "Rate limit exceeded. Please try again later."):
        super().__init__(message, status_code=429)
