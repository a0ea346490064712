"""Store service - catalog listing, purchases and catalog seeding"""

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload
from typing import Any, Dict, List
import logging

from codemaster.models.store import StoreItem
from codemaster.models.ledger import InventoryEntry
from codemaster.services.ledger_service import ledger_service
from codemaster.core.exceptions import InsufficientFundsError, ResourceNotFoundError
from codemaster.core.metrics import STORE_PURCHASES

logger = logging.getLogger(__name__)

SEED_CATALOG: List[Dict[str, Any]] = [
    {
        "name": "CodeMaster Cap",
        "description": "A stylish cap with the CodeMaster logo.",
        "price": 500,
        "type": "cap",
        "image": "https://images.unsplash.com/photo-1588850561407-ed78c282e89b?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "Dev T-Shirt",
        "description": "Cotton t-shirt for comfortable coding sessions.",
        "price": 1000,
        "type": "shirt",
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "Laptop Sleeve",
        "description": "Protective sleeve for your machine.",
        "price": 1500,
        "type": "laptop_sleeve",
        "image": "https://images.unsplash.com/photo-1603302576837-37561b2e2302?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "Code Sticker Pack",
        "description": "Decorate your laptop with cool dev stickers.",
        "price": 200,
        "type": "sticker",
        "image": "https://images.unsplash.com/photo-1572375992501-16c0287dd4c3?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "Blind 75 & Grind 169 Cheat Sheet",
        "description": "The ultimate curated list of LeetCode patterns for ace interviews.",
        "price": 500,
        "type": "dsa_sheet",
        "image": "https://images.unsplash.com/photo-1544396821-4dd40b938ad3?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "System Design Masterclass",
        "description": "Comprehensive course on designing scalable distributed systems.",
        "price": 2000,
        "type": "course",
        "image": "https://images.unsplash.com/photo-1501504905252-473c47e087f8?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "Premium Contest Entry Ticket",
        "description": "One-time pass to enter a premium prize pool contest.",
        "price": 100,
        "type": "contest_pass",
        "image": "https://images.unsplash.com/photo-1543536448-d209d2d13a1c?auto=format&fit=crop&q=80&w=1000",
    },
    {
        "name": "1-on-1 Mock Interview",
        "description": "1 hour mock interview with a FAANG engineer.",
        "price": 1500,
        "type": "mentorship",
        "image": "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?auto=format&fit=crop&q=80&w=1000",
    },
]


class StoreService:
    """Service for the points store"""

    @staticmethod
    def list_items(db: Session) -> List[StoreItem]:
        """Full catalog, no pagination"""
        return db.query(StoreItem).order_by(StoreItem.id).all()

    @staticmethod
    def get_inventory(db: Session, user_id: int) -> List[InventoryEntry]:
        """User's purchases in purchase order"""
        return (
            db.query(InventoryEntry)
            .options(joinedload(InventoryEntry.item))
            .filter(InventoryEntry.user_id == user_id)
            .order_by(InventoryEntry.purchase_date, InventoryEntry.id)
            .all()
        )

    @staticmethod
    def purchase(db: Session, user_id: int, item_id: int) -> Dict[str, Any]:
        """
        Buy an item with points

        Args:
            db: Database session
            user_id: Buyer
            item_id: Catalog item

        Returns:
            Updated balance, full inventory and a confirmation message
        """
        try:
            entry = ledger_service.debit_for_purchase(db, user_id, item_id)
        except InsufficientFundsError:
            STORE_PURCHASES.labels("insufficient_funds").inc()
            logger.warning(f"Purchase of item {item_id} by user {user_id} rejected: not enough points")
            raise
        except ResourceNotFoundError:
            STORE_PURCHASES.labels("not_found").inc()
            raise

        STORE_PURCHASES.labels("success").inc()
        user = entry.user
        return {
            "points": user.points,
            "inventory": StoreService.get_inventory(db, user_id),
            "message": f"Successfully purchased {entry.item.name}",
        }

    @staticmethod
    def reseed_catalog(db: Session) -> Dict[str, int]:
        """
        Upsert the fixed seed catalog keyed by item name

        Items that are no longer part of the seed list are removed only when
        nobody owns them. Repeated calls leave the catalog unchanged.

        Returns:
            Counts of created, updated and removed items
        """
        seed_names = [entry["name"] for entry in SEED_CATALOG]
        existing = {
            item.name: item
            for item in db.query(StoreItem).filter(StoreItem.name.in_(seed_names)).all()
        }
        created = updated = 0

        try:
            for entry in SEED_CATALOG:
                item = existing.get(entry["name"])
                if item is None:
                    db.add(StoreItem(**entry))
                    created += 1
                    continue

                changed = False
                for field, value in entry.items():
                    if getattr(item, field) != value:
                        setattr(item, field, value)
                        changed = True
                if changed:
                    updated += 1

            owned_item_ids = select(InventoryEntry.item_id).distinct()
            removed = (
                db.query(StoreItem)
                .filter(StoreItem.name.notin_(seed_names), StoreItem.id.notin_(owned_item_ids))
                .delete(synchronize_session=False)
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Store catalog seeded: {created} created, {updated} updated, {removed} removed")
        return {"created": created, "updated": updated, "removed": removed}


# Singleton instance
store_service = StoreService()
