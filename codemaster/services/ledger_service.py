"""Points ledger - balance credits, solve crediting and purchase debits

Every balance change is a single conditional UPDATE on the user row plus an
append to ``point_events``, committed together. No code path reads the
balance, changes it in Python and writes it back.
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from typing import Any, Dict, List, Optional
from datetime import datetime
import math
import logging

from codemaster.models.user import User
from codemaster.models.problem import Problem
from codemaster.models.store import StoreItem
from codemaster.models.ledger import SolvedProblem, InventoryEntry, PointEvent
from codemaster.core.exceptions import (
    InvalidInputError,
    InsufficientFundsError,
    ResourceNotFoundError,
)
from codemaster.core.metrics import POINTS_AWARDED, SOLVE_CREDITS

logger = logging.getLogger(__name__)

DIFFICULTY_POINTS: Dict[str, int] = {"Easy": 10, "Medium": 20, "Hard": 50}
DEFAULT_SOLVE_POINTS = 10
# users.points is a 32-bit INTEGER column
MAX_BALANCE = 2 ** 31 - 1


def points_for_difficulty(difficulty: Optional[str]) -> int:
    """Award for a first solve; unknown difficulties get the default"""
    return DIFFICULTY_POINTS.get(difficulty or "", DEFAULT_SOLVE_POINTS)


def parse_point_amount(value: Any) -> int:
    """
    Validate a point amount coming from a request body.

    Accepts non-negative ints and strings of decimal digits. Floats are
    accepted only when they are finite whole numbers.

    Raises:
        InvalidInputError: for anything else (bool, NaN, negatives, text,
            amounts above MAX_BALANCE)
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError("Points must be a non-negative integer", details={"points": value})

    if isinstance(value, int):
        amount = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise InvalidInputError("Points must be a non-negative integer", details={"points": str(value)})
        amount = int(value)
    elif isinstance(value, str):
        raw = value.strip()
        if not raw.isdigit() or not raw.isascii() or len(raw) > len(str(MAX_BALANCE)):
            raise InvalidInputError("Points must be a non-negative integer", details={"points": value})
        amount = int(raw)
    else:
        raise InvalidInputError("Points must be a non-negative integer")

    if amount < 0:
        raise InvalidInputError("Points must be a non-negative integer", details={"points": amount})
    if amount > MAX_BALANCE:
        raise InvalidInputError(
            f"Points must not exceed {MAX_BALANCE}",
            details={"points": str(amount), "max": MAX_BALANCE}
        )
    return amount


class LedgerService:
    """Service for point balance mutations"""

    @staticmethod
    def _require_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise ResourceNotFoundError("User")
        return user

    @staticmethod
    def _current_balance(db: Session, user_id: int) -> int:
        return db.query(User.points).filter(User.id == user_id).scalar()

    @staticmethod
    def _record_event(
        db: Session,
        user_id: int,
        delta: int,
        reason: str,
        reference: Optional[str] = None
    ) -> PointEvent:
        event = PointEvent(
            user_id=user_id,
            delta=delta,
            reason=reason,
            reference=reference,
            balance_after=LedgerService._current_balance(db, user_id),
        )
        db.add(event)
        return event

    @staticmethod
    def _apply_credit(db: Session, user_id: int, amount: int) -> int:
        """Atomic increment bounded by MAX_BALANCE; returns rows updated"""
        return db.query(User).filter(
            User.id == user_id,
            User.points <= MAX_BALANCE - amount
        ).update(
            {User.points: User.points + amount},
            synchronize_session=False
        )

    @staticmethod
    def award_points(db: Session, user_id: int, amount: Any, reason: str = "manual") -> int:
        """
        Credit points to a user

        Args:
            db: Database session
            user_id: User ID
            amount: Raw amount, validated with parse_point_amount
            reason: Free-form source, e.g. 'lecture_complete', 'quiz_pass'

        Returns:
            New balance
        """
        points = parse_point_amount(amount)

        try:
            if not LedgerService._apply_credit(db, user_id, points):
                LedgerService._require_user(db, user_id)
                raise InvalidInputError(
                    "Balance would exceed the maximum",
                    details={"points": points, "max": MAX_BALANCE}
                )
            LedgerService._record_event(db, user_id, points, reason)
            db.commit()
        except Exception:
            db.rollback()
            raise

        balance = LedgerService._current_balance(db, user_id)
        POINTS_AWARDED.labels(reason).inc(points)
        logger.info(f"Awarded {points} points to user {user_id} ({reason}); balance={balance}")
        return balance

    @staticmethod
    def _claim_solve(db: Session, user_id: int, problem_id: int) -> bool:
        """
        Add (user, problem) to the solved set if absent.

        Returns True only when this call inserted the row.
        """
        dialect = db.get_bind().dialect.name
        values = {"user_id": user_id, "problem_id": problem_id}

        if dialect in ("postgresql", "sqlite"):
            insert = pg_insert if dialect == "postgresql" else sqlite_insert
            stmt = insert(SolvedProblem.__table__).values(**values).on_conflict_do_nothing(
                index_elements=["user_id", "problem_id"]
            )
            return db.execute(stmt).rowcount == 1

        try:
            with db.begin_nested():
                db.add(SolvedProblem(**values))
            return True
        except IntegrityError:
            return False

    @staticmethod
    def credit_solve(db: Session, user_id: int, problem_id: int, commit: bool = True) -> int:
        """
        Credit a first solve of a problem

        Args:
            db: Database session
            user_id: User ID
            problem_id: Problem ID
            commit: Commit the unit of work; False lets the caller fold the
                credit into its own transaction

        Returns:
            Points credited (0 if the problem was already solved)
        """
        LedgerService._require_user(db, user_id)
        problem = db.query(Problem).filter(Problem.id == problem_id).first()
        if not problem:
            raise ResourceNotFoundError("Problem")

        award = points_for_difficulty(problem.difficulty)

        try:
            if not LedgerService._claim_solve(db, user_id, problem_id):
                SOLVE_CREDITS.labels("already_solved").inc()
                logger.info(f"User {user_id} already solved problem {problem_id}; no points")
                return 0

            if not LedgerService._apply_credit(db, user_id, award):
                raise InvalidInputError(
                    "Balance would exceed the maximum",
                    details={"points": award, "max": MAX_BALANCE}
                )
            LedgerService._record_event(db, user_id, award, "problem_solved", reference=f"problem:{problem_id}")
            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise

        SOLVE_CREDITS.labels("credited").inc()
        POINTS_AWARDED.labels("problem_solved").inc(award)
        logger.info(f"User {user_id} solved problem {problem_id} ({problem.difficulty}): +{award}")
        return award

    @staticmethod
    def debit_for_purchase(db: Session, user_id: int, item_id: int) -> InventoryEntry:
        """
        Debit the item price and append an inventory entry in one transaction

        Raises:
            ResourceNotFoundError: user or item missing
            InsufficientFundsError: balance below price; nothing is changed
        """
        user = LedgerService._require_user(db, user_id)
        item = db.query(StoreItem).filter(StoreItem.id == item_id).first()
        if not item:
            raise ResourceNotFoundError("Item")

        try:
            debited = db.query(User).filter(
                User.id == user_id,
                User.points >= item.price
            ).update(
                {User.points: User.points - item.price},
                synchronize_session=False
            )
            if not debited:
                db.rollback()
                db.refresh(user)
                raise InsufficientFundsError(balance=user.points, price=item.price)

            entry = InventoryEntry(
                user_id=user_id,
                item_id=item.id,
                price_paid=item.price,
                purchase_date=datetime.utcnow(),
            )
            db.add(entry)
            LedgerService._record_event(db, user_id, -item.price, "purchase", reference=f"item:{item.id}")
            db.commit()
        except InsufficientFundsError:
            raise
        except Exception:
            db.rollback()
            raise

        db.refresh(entry)
        logger.info(f"User {user_id} bought '{item.name}' for {item.price} points")
        return entry

    @staticmethod
    def point_history(db: Session, user_id: int) -> List[PointEvent]:
        """Balance changes of a user, newest first"""
        return (
            db.query(PointEvent)
            .filter(PointEvent.user_id == user_id)
            .order_by(PointEvent.id.desc())
            .all()
        )


# Singleton instance
ledger_service = LedgerService()
