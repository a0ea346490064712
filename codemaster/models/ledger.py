"""Points ledger models - solved set, inventory and balance history"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from codemaster.core.database import Base


class SolvedProblem(Base):
    """Membership of a problem in a user's solved set"""

    __tablename__ = "solved_problems"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    problem_id = Column(Integer, ForeignKey("problems.id", ondelete="CASCADE"), nullable=False)
    solved_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="solved_problems")
    problem = relationship("Problem")

    __table_args__ = (
        # One credit per (user, problem); the solve-credit insert relies on this.
        UniqueConstraint('user_id', 'problem_id', name='uq_solved_user_problem'),
        Index('idx_solved_problems_user', 'user_id'),
    )

    def __repr__(self):
        return f"<SolvedProblem(user_id={self.user_id}, problem_id={self.problem_id})>"


class InventoryEntry(Base):
    """One purchase of a store item; repeated purchases are separate rows"""

    __tablename__ = "inventory_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    item_id = Column(Integer, ForeignKey("store_items.id", ondelete="RESTRICT"), nullable=False)
    price_paid = Column(Integer, nullable=False)
    purchase_date = Column(DateTime(timezone=True), nullable=False)

    user = relationship("User", back_populates="inventory")
    item = relationship("StoreItem")

    __table_args__ = (
        Index('idx_inventory_user', 'user_id'),
        Index('idx_inventory_item', 'item_id'),
    )

    def __repr__(self):
        return f"<InventoryEntry(id={self.id}, user_id={self.user_id}, item_id={self.item_id})>"


class PointEvent(Base):
    """Immutable record of a single balance change"""

    __tablename__ = "point_events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    delta = Column(Integer, nullable=False)
    reason = Column(String(64), nullable=False)
    reference = Column(String(128), nullable=True)
    balance_after = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="point_events")

    __table_args__ = (
        Index('idx_point_events_user', 'user_id'),
    )

    def __repr__(self):
        return f"<PointEvent(user_id={self.user_id}, delta={self.delta}, reason='{self.reason}')>"
