"""Store routes - catalog, purchases and seeding"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from codemaster.core.database import get_db
from codemaster.schemas.store import StoreItemResponse, PurchaseRequest, PurchaseResponse, SeedResponse
from codemaster.services.store_service import store_service
from codemaster.services.audit_service import audit_service
from codemaster.api.deps import RequestContext, get_request_context, require_seed_access

router = APIRouter()


@router.get("", response_model=List[StoreItemResponse])
def list_items(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Full store catalog"""
    return store_service.list_items(db)


@router.post("/buy", response_model=PurchaseResponse)
def buy_item(
    body: PurchaseRequest,
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """
    Buy an item with points

    Args:
        body: Item to buy
        ctx: Request context
        db: Database session

    Returns:
        Remaining points, inventory and confirmation message
    """
    return store_service.purchase(db, ctx.user_id, body.item_id)


@router.post("/seed", response_model=SeedResponse)
def seed_items(
    ctx: Optional[RequestContext] = Depends(require_seed_access),
    db: Session = Depends(get_db)
):
    """Upsert the fixed seed catalog (development/admin operation)"""
    stats = store_service.reseed_catalog(db)
    audit_service.log_event(
        db,
        actor_id=ctx.user_id if ctx else None,
        action="reseed_store_catalog",
        target_type="store_item",
        ip_address=ctx.client_ip if ctx else None,
        metadata=stats,
    )
    return SeedResponse(message="Store seeded successfully", **stats)
