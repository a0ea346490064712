"""User and login history models"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from codemaster.core.database import Base


class User(Base):
    """User model for authentication, points and progression"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    points = Column(Integer, default=0, server_default="0", nullable=False)
    role = Column(String(20), default="user", nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login = Column(DateTime(timezone=True))
    failed_login_attempts = Column(Integer, default=0, nullable=False)
    locked_until = Column(DateTime(timezone=True))

    # Relationships
    login_history = relationship(
        "LoginEvent",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="LoginEvent.id",
    )
    solved_problems = relationship("SolvedProblem", back_populates="user", cascade="all, delete-orphan")
    inventory = relationship(
        "InventoryEntry",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="InventoryEntry.id",
    )
    point_events = relationship("PointEvent", back_populates="user", cascade="all, delete-orphan")
    submissions = relationship("Submission", back_populates="user", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_username', 'username'),
        Index('idx_users_email', 'email'),
        Index('idx_users_role', 'role'),
        Index('idx_users_points', 'points'),
        CheckConstraint('points >= 0', name='chk_points_non_negative'),
        CheckConstraint("role IN ('user', 'admin')", name='chk_role'),
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}', points={self.points})>"


class LoginEvent(Base):
    """Append-only login history entry"""

    __tablename__ = "login_events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    logged_in_at = Column(DateTime(timezone=True), nullable=False)
    ip_address = Column(String(64), nullable=True)

    user = relationship("User", back_populates="login_history")

    __table_args__ = (
        Index('idx_login_events_user', 'user_id'),
    )
