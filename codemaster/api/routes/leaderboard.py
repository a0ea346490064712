"""Leaderboard routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from codemaster.core.database import get_db
from codemaster.schemas.leaderboard import LeaderboardEntry
from codemaster.services.leaderboard_service import leaderboard_service

router = APIRouter()


@router.get("", response_model=List[LeaderboardEntry])
def get_global_leaderboard(db: Session = Depends(get_db)):
    """Top users by points, then solved count"""
    return leaderboard_service.get_leaderboard(db)
