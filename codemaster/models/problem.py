"""Problem and test case models"""

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from codemaster.core.database import Base


class Problem(Base):
    """Coding problem"""

    __tablename__ = "problems"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(20), nullable=False)
    constraints = Column(Text)
    input_format = Column(Text)
    output_format = Column(Text)
    template = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    test_cases = relationship(
        "ProblemTestCase",
        back_populates="problem",
        cascade="all, delete-orphan",
        order_by="ProblemTestCase.position",
    )

    __table_args__ = (
        Index('idx_problems_difficulty', 'difficulty'),
    )

    def __repr__(self):
        return f"<Problem(id={self.id}, title='{self.title}', difficulty='{self.difficulty}')>"


class ProblemTestCase(Base):
    """Ordered input/output pair of a problem"""

    __tablename__ = "problem_test_cases"

    id = Column(Integer, primary_key=True, index=True)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)
    input = Column(Text, nullable=False)
    output = Column(Text, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)

    problem = relationship("Problem", back_populates="test_cases")

    __table_args__ = (
        Index('idx_test_cases_problem', 'problem_id'),
    )
