"""Submission model"""

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship
from codemaster.core.database import Base

VERDICTS = (
    "Accepted",
    "Wrong Answer",
    "Time Limit Exceeded",
    "Runtime Error",
    "Compilation Error",
)


class Submission(Base):
    """Submission model - append-only log of submit actions"""

    __tablename__ = "submissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="RESTRICT"), nullable=False)
    language = Column(String(20), nullable=False)
    code = Column(Text, nullable=False)
    status = Column(String(32), nullable=False)
    execution_time = Column(Float)  # ms
    memory_used = Column(Integer)  # KB
    created_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    user = relationship("User", back_populates="submissions")
    problem = relationship("Problem")

    __table_args__ = (
        Index('idx_submissions_user', 'user_id'),
        Index('idx_submissions_problem', 'problem_id'),
        Index('idx_submissions_created_at', 'created_at'),
        CheckConstraint('execution_time >= 0', name='chk_execution_time'),
        CheckConstraint('memory_used >= 0', name='chk_memory_used'),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{v}'" for v in VERDICTS)),
            name='chk_status'
        ),
    )

    def __repr__(self):
        return f"<Submission(id={self.id}, user_id={self.user_id}, problem_id={self.problem_id}, status='{self.status}')>"
