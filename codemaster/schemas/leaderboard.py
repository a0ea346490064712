"""Leaderboard schemas"""

from typing import Optional
from datetime import datetime

from codemaster.schemas.response import CamelModel


class LeaderboardEntry(CamelModel):
    """Ranked user"""
    id: int
    username: str
    points: int
    solved_count: int
    last_login: Optional[datetime] = None
