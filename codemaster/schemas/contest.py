"""Contest schemas"""

from pydantic import Field
from typing import Optional, List
from datetime import datetime

from codemaster.schemas.response import CamelModel
from codemaster.schemas.problem import ProblemSummary


class ContestCreate(CamelModel):
    """Create contest schema"""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    problems: List[int] = []


class ParticipantSummary(CamelModel):
    """Registered user with display fields"""
    id: int
    username: str
    points: int


class ContestResponse(CamelModel):
    """Contest listing entry"""
    id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    participant_count: int = 0
    problem_ids: List[int] = []


class ContestDetailResponse(CamelModel):
    """Contest with populated problems and participants"""
    id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    problems: List[ProblemSummary] = []
    participants: List[ParticipantSummary] = []
