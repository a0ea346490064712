"""User routes - admin listing and the caller's ledger views"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from codemaster.core.database import get_db
from codemaster.schemas.user import UserListItem, PointEventResponse
from codemaster.schemas.store import InventoryEntryResponse
from codemaster.services.user_service import user_service
from codemaster.services.store_service import store_service
from codemaster.services.ledger_service import ledger_service
from codemaster.api.deps import RequestContext, get_request_context, get_admin_context

router = APIRouter()


@router.get("", response_model=List[UserListItem])
def get_all_users(
    role: Optional[str] = None,
    ctx: RequestContext = Depends(get_admin_context),
    db: Session = Depends(get_db)
):
    """Get all users (admin only)"""
    return user_service.get_all_users(db, role)


@router.get("/me/inventory", response_model=List[InventoryEntryResponse])
def get_my_inventory(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Caller's purchased items in purchase order"""
    return store_service.get_inventory(db, ctx.user_id)


@router.get("/me/points", response_model=List[PointEventResponse])
def get_my_point_history(
    ctx: RequestContext = Depends(get_request_context),
    db: Session = Depends(get_db)
):
    """Caller's balance changes, newest first"""
    return ledger_service.point_history(db, ctx.user_id)
