"""User service - handles registration, authentication and profiles"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta
from codemaster.config import settings
from codemaster.models.user import User, LoginEvent
from codemaster.models.ledger import SolvedProblem
from codemaster.schemas.user import UserSignup, UserRole
from codemaster.core.security import get_password_hash, verify_password
from codemaster.core.exceptions import (
    InvalidCredentialsError,
    AccountLockedError,
    AuthorizationError,
    ResourceAlreadyExistsError,
    ResourceNotFoundError
)
from codemaster.services.store_service import store_service
from codemaster.services.ledger_service import ledger_service
import logging

logger = logging.getLogger(__name__)


class UserService:
    """Service for user management"""

    LOCKOUT_DURATION_MINUTES = 15
    MAX_FAILED_ATTEMPTS = 5

    @staticmethod
    def _ensure_available(db: Session, email: str, username: str) -> None:
        if db.query(User.id).filter(User.email == email).first():
            raise ResourceAlreadyExistsError("User", "User with this email already exists")

        if db.query(User.id).filter(func.lower(User.username) == username.lower()).first():
            raise ResourceAlreadyExistsError("User", "Username is already taken")

    @staticmethod
    def create_user(db: Session, user_data: UserSignup, allow_admin: bool = False) -> User:
        """
        Register a new user

        Args:
            db: Database session
            user_data: Signup payload
            allow_admin: Permit the admin role regardless of settings

        Returns:
            Created user
        """
        role = user_data.role or UserRole.USER
        if role == UserRole.ADMIN and not (allow_admin or settings.ALLOW_ADMIN_SIGNUP):
            raise AuthorizationError(
                "Admin accounts cannot be created through signup (ALLOW_ADMIN_SIGNUP is disabled)"
            )

        UserService._ensure_available(db, user_data.email, user_data.username)

        user = User(
            username=user_data.username,
            email=user_data.email,
            password_hash=get_password_hash(user_data.password),
            role=role.value,
            points=0,
        )

        try:
            db.add(user)
            db.commit()
        except IntegrityError:
            # A concurrent signup took the email or username after the check.
            db.rollback()
            raise ResourceAlreadyExistsError("User", "User with this email or username already exists")
        db.refresh(user)

        logger.info(f"Created user: {user.username} (role: {user.role})")
        return user

    @staticmethod
    def authenticate_user(db: Session, email: str, password: str, ip_address: Optional[str] = None) -> User:
        """
        Authenticate user with account lockout protection

        Args:
            db: Database session
            email: Login email
            password: Password
            ip_address: Client address recorded in the login history

        Returns:
            Authenticated user
        """
        user = db.query(User).filter(User.email == email).first()

        if not user or not user.is_active:
            raise InvalidCredentialsError()

        # Check if account is locked
        now = datetime.utcnow()
        locked_until = user.locked_until.replace(tzinfo=None) if user.locked_until else None
        if locked_until and locked_until > now:
            raise AccountLockedError(locked_until.isoformat())

        # Verify password
        if not verify_password(password, user.password_hash):
            user.failed_login_attempts = (user.failed_login_attempts or 0) + 1

            if user.failed_login_attempts >= UserService.MAX_FAILED_ATTEMPTS:
                user.locked_until = now + timedelta(minutes=UserService.LOCKOUT_DURATION_MINUTES)
                user.failed_login_attempts = 0
                db.commit()
                logger.warning(f"Account locked for user: {user.username}")
                raise AccountLockedError(user.locked_until.isoformat())

            db.commit()
            raise InvalidCredentialsError()

        # Reset failed attempts on successful login
        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login = now
        db.add(LoginEvent(user_id=user.id, logged_in_at=now, ip_address=ip_address))
        db.commit()
        db.refresh(user)

        logger.info(f"User authenticated: {user.username}")
        return user

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email.strip().lower()).first()

    @staticmethod
    def get_all_users(db: Session, role: Optional[str] = None) -> List[User]:
        """
        Get all users, optionally filtered by role

        Args:
            db: Database session
            role: Optional role filter

        Returns:
            List of users
        """
        query = db.query(User)

        if role:
            query = query.filter(User.role == role)

        return query.order_by(User.id).all()

    @staticmethod
    def get_profile(db: Session, user_id: int) -> Dict[str, Any]:
        """Profile with solved count, inventory and login history"""
        user = UserService.get_user_by_id(db, user_id)
        if not user:
            raise ResourceNotFoundError("User")

        solved_count = db.query(func.count(SolvedProblem.id)).filter(SolvedProblem.user_id == user_id).scalar()
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
            "points": user.points,
            "is_active": user.is_active,
            "created_at": user.created_at,
            "last_login": user.last_login,
            "solved_count": solved_count or 0,
            "inventory": store_service.get_inventory(db, user_id),
            "login_history": [event.logged_in_at for event in user.login_history],
        }

    @staticmethod
    def ensure_admin(db: Session) -> User:
        """
        Create the bootstrap admin from settings, or promote the existing
        account with that email to admin

        Returns:
            Admin user
        """
        admin = UserService.get_user_by_email(db, settings.ADMIN_EMAIL)
        if admin:
            if admin.role != UserRole.ADMIN.value:
                admin.role = UserRole.ADMIN.value
                db.commit()
                logger.info(f"Promoted {admin.email} to admin")
            return admin

        admin = UserService.create_user(
            db,
            UserSignup(
                username=settings.ADMIN_USERNAME,
                email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD,
                role=UserRole.ADMIN,
            ),
            allow_admin=True,
        )
        if settings.ADMIN_INITIAL_POINTS:
            ledger_service.award_points(db, admin.id, settings.ADMIN_INITIAL_POINTS, "admin_bootstrap")
            db.refresh(admin)
        logger.info(f"Created admin user: {admin.email}")
        return admin


# Singleton instance
user_service = UserService()
