"""Problem schemas"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from codemaster.schemas.response import CamelModel


class Difficulty(str, Enum):
    """Problem difficulty"""
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ProblemTestCaseSchema(CamelModel):
    """Input/output pair"""
    input: str
    output: str
    is_public: bool = False


class ProblemCreate(CamelModel):
    """Create problem schema"""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    difficulty: Difficulty
    constraints: Optional[str] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    test_cases: List[ProblemTestCaseSchema] = []
    template: Optional[str] = None


class ProblemUpdate(CamelModel):
    """Partial update; omitted fields are left unchanged"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    difficulty: Optional[Difficulty] = None
    constraints: Optional[str] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    test_cases: Optional[List[ProblemTestCaseSchema]] = None
    template: Optional[str] = None


class ProblemSummary(CamelModel):
    """Problem reference with display fields"""
    id: int
    title: str
    difficulty: str


class ProblemResponse(CamelModel):
    """Problem detail"""
    id: int
    title: str
    description: str
    difficulty: str
    constraints: Optional[str] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    test_cases: List[ProblemTestCaseSchema] = []
    template: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
