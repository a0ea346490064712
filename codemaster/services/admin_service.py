"""Admin dashboard statistics"""

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Dict

from codemaster.config import settings
from codemaster.models.user import User
from codemaster.models.problem import Problem
from codemaster.models.submission import Submission


class AdminService:
    """Read-only aggregates for the admin dashboard"""

    @staticmethod
    def dashboard_stats(db: Session) -> Dict[str, int]:
        since = datetime.utcnow() - timedelta(days=settings.ACTIVE_USER_WINDOW_DAYS)
        users = db.query(User).filter(User.role == "user")
        return {
            "total_users": users.count(),
            "total_problems": db.query(Problem).count(),
            "active_users": users.filter(User.last_login >= since).count(),
            "total_submissions": db.query(Submission).count(),
        }


admin_service = AdminService()
