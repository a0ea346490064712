"""Store catalog model"""

from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.sql import func
from codemaster.core.database import Base

ITEM_TYPES = (
    "cap",
    "shirt",
    "laptop_sleeve",
    "sticker",
    "other",
    "dsa_sheet",
    "course",
    "contest_pass",
    "mentorship",
)


class StoreItem(Base):
    """Purchasable catalog item"""

    __tablename__ = "store_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    type = Column(String(32), nullable=False)
    image = Column(String(512), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('price >= 0', name='chk_price_non_negative'),
        CheckConstraint(
            "type IN ({})".format(", ".join(f"'{t}'" for t in ITEM_TYPES)),
            name='chk_item_type'
        ),
    )

    def __repr__(self):
        return f"<StoreItem(id={self.id}, name='{self.name}', price={self.price})>"
