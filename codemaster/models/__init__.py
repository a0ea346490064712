"""Database models"""

from codemaster.models.user import User, LoginEvent
from codemaster.models.ledger import SolvedProblem, InventoryEntry, PointEvent
from codemaster.models.store import StoreItem
from codemaster.models.problem import Problem, ProblemTestCase
from codemaster.models.submission import Submission
from codemaster.models.contest import Contest, ContestParticipant, ContestProblem
from codemaster.models.audit import AuditEvent

__all__ = [
    "User", "LoginEvent",
    "SolvedProblem", "InventoryEntry", "PointEvent",
    "StoreItem",
    "Problem", "ProblemTestCase",
    "Submission",
    "Contest", "ContestParticipant", "ContestProblem",
    "AuditEvent",
]
