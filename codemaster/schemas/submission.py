"""Submission schemas"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from codemaster.schemas.response import CamelModel
from codemaster.schemas.problem import ProblemSummary


class LanguageEnum(str, Enum):
    """Supported programming languages"""
    PYTHON = "python"
    JAVA = "java"
    C = "c"
    CPP = "cpp"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    GO = "go"
    RUST = "rust"
    CSHARP = "csharp"


class SubmissionCreate(CamelModel):
    """Create submission schema"""
    problem_id: int = Field(..., ge=1)
    language: LanguageEnum
    code: str = Field(..., min_length=1, max_length=51200)

    @field_validator('code')
    @classmethod
    def sanitize_code(cls, v):
        """Sanitize code input"""
        v = v.replace('\x00', '')
        lines = v.split('\n')
        if len(lines) > 1000:
            raise ValueError('Code exceeds 1000 lines')
        return v


class SubmissionResponse(CamelModel):
    """Submission response schema"""
    id: int
    user_id: int
    problem_id: int
    language: str
    code: str
    status: str
    execution_time: Optional[float] = None
    memory_used: Optional[int] = None
    created_at: Optional[datetime] = None


class SubmissionHistoryItem(SubmissionResponse):
    """Caller's submission with the problem's display fields"""
    problem: Optional[ProblemSummary] = None
