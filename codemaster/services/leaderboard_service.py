"""Leaderboard service - ranked read projection over users"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from codemaster.config import settings
from codemaster.models.user import User
from codemaster.models.ledger import SolvedProblem


class LeaderboardService:
    """Service for the global leaderboard"""

    @staticmethod
    def get_leaderboard(db: Session, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Top users by points, then solved count, then registration order

        Args:
            db: Database session
            limit: Maximum entries, defaults to LEADERBOARD_LIMIT

        Returns:
            Leaderboard entries
        """
        limit = settings.LEADERBOARD_LIMIT if limit is None else min(limit, settings.LEADERBOARD_LIMIT)

        solved_count = (
            db.query(func.count(SolvedProblem.id))
            .filter(SolvedProblem.user_id == User.id)
            .correlate(User)
            .scalar_subquery()
            .label("solved_count")
        )

        rows = (
            db.query(User.id, User.username, User.points, solved_count, User.last_login)
            .filter(User.role == "user", User.is_active.is_(True))
            .order_by(User.points.desc(), solved_count.desc(), User.id.asc())
            .limit(limit)
            .all()
        )

        return [
            {
                "id": user_id,
                "username": username,
                "points": points,
                "solved_count": solved or 0,
                "last_login": last_login,
            }
            for user_id, username, points, solved, last_login in rows
        ]


# Singleton instance
leaderboard_service = LeaderboardService()
