"""Contest models"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from codemaster.core.database import Base


class Contest(Base):
    """Contest metadata"""

    __tablename__ = "contests"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    participants = relationship(
        "ContestParticipant",
        back_populates="contest",
        cascade="all, delete-orphan",
        order_by="ContestParticipant.id",
    )
    problems = relationship(
        "ContestProblem",
        back_populates="contest",
        cascade="all, delete-orphan",
        order_by="ContestProblem.position",
    )

    __table_args__ = (
        Index('idx_contests_start_time', 'start_time'),
    )

    def __repr__(self):
        return f"<Contest(id={self.id}, title='{self.title}')>"


class ContestParticipant(Base):
    """Registration of a user in a contest"""

    __tablename__ = "contest_participants"

    id = Column(Integer, primary_key=True, index=True)
    contest_id = Column(Integer, ForeignKey("contests.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    registered_at = Column(DateTime(timezone=True), server_default=func.now())

    contest = relationship("Contest", back_populates="participants")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint('contest_id', 'user_id', name='uq_contest_participant'),
    )


class ContestProblem(Base):
    """Ordered problem slot of a contest"""

    __tablename__ = "contest_problems"

    id = Column(Integer, primary_key=True, index=True)
    contest_id = Column(Integer, ForeignKey("contests.id", ondelete="CASCADE"), nullable=False)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)

    contest = relationship("Contest", back_populates="problems")
    problem = relationship("Problem")
