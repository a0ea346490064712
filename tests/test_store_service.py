import pytest

from codemaster.core.exceptions import InsufficientFundsError, ResourceNotFoundError
from codemaster.models.ledger import InventoryEntry, PointEvent
from codemaster.models.store import StoreItem
from codemaster.models.user import User
from codemaster.services.store_service import SEED_CATALOG, store_service

from conftest import make_user


def _item(db, name):
    return db.query(StoreItem).filter(StoreItem.name == name).one()


def _balance(db, user_id):
    db.expire_all()
    return db.query(User.points).filter(User.id == user_id).scalar()


def test_seed_creates_catalog(db):
    stats = store_service.reseed_catalog(db)

    assert stats == {"created": len(SEED_CATALOG), "updated": 0, "removed": 0}
    items = store_service.list_items(db)
    assert len(items) == 8
    assert {item.name for item in items} == {entry["name"] for entry in SEED_CATALOG}


def test_reseed_is_idempotent(db):
    store_service.reseed_catalog(db)
    ids_before = {item.name: item.id for item in store_service.list_items(db)}

    stats = store_service.reseed_catalog(db)

    assert stats == {"created": 0, "updated": 0, "removed": 0}
    assert {item.name: item.id for item in store_service.list_items(db)} == ids_before


def test_reseed_restores_changed_fields(db):
    store_service.reseed_catalog(db)
    cap = _item(db, "CodeMaster Cap")
    cap.price = 1
    db.commit()

    stats = store_service.reseed_catalog(db)

    assert stats["updated"] == 1
    assert _item(db, "CodeMaster Cap").price == 500


def test_reseed_keeps_owned_stale_items(db):
    store_service.reseed_catalog(db)
    owned = StoreItem(name="Retired Mug", description="Old", price=10, type="other", image="mug.png")
    stale = StoreItem(name="Retired Pen", description="Old", price=10, type="other", image="pen.png")
    db.add_all([owned, stale])
    db.commit()
    user = make_user(db, "collector", points=10)
    store_service.purchase(db, user.id, owned.id)

    stats = store_service.reseed_catalog(db)

    assert stats["removed"] == 1
    names = {item.name for item in store_service.list_items(db)}
    assert "Retired Mug" in names
    assert "Retired Pen" not in names


def test_purchase_debits_price(db):
    store_service.reseed_catalog(db)
    sticker = _item(db, "Code Sticker Pack")
    user = make_user(db, "buyer", points=1000)

    result = store_service.purchase(db, user.id, sticker.id)

    assert result["points"] == 800
    assert result["message"] == "Successfully purchased Code Sticker Pack"
    assert [entry.item_id for entry in result["inventory"]] == [sticker.id]
    assert result["inventory"][0].price_paid == 200
    assert _balance(db, user.id) == 800


def test_purchase_exact_balance_reaches_zero(db):
    store_service.reseed_catalog(db)
    ticket = _item(db, "Premium Contest Entry Ticket")
    user = make_user(db, "exact", points=100)

    result = store_service.purchase(db, user.id, ticket.id)

    assert result["points"] == 0


def test_purchase_insufficient_funds_changes_nothing(db):
    store_service.reseed_catalog(db)
    course = _item(db, "System Design Masterclass")
    user = make_user(db, "poor", points=1999)

    with pytest.raises(InsufficientFundsError) as exc_info:
        store_service.purchase(db, user.id, course.id)

    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"balance": 1999, "price": 2000}
    assert _balance(db, user.id) == 1999
    assert db.query(InventoryEntry).count() == 0
    assert db.query(PointEvent).count() == 0


def test_purchase_missing_item(db):
    user = make_user(db, "lost", points=100)
    with pytest.raises(ResourceNotFoundError):
        store_service.purchase(db, user.id, 77)


def test_purchase_missing_user(db):
    store_service.reseed_catalog(db)
    sticker = _item(db, "Code Sticker Pack")
    with pytest.raises(ResourceNotFoundError):
        store_service.purchase(db, 404, sticker.id)


def test_repeat_purchases_are_separate_entries(db):
    store_service.reseed_catalog(db)
    sticker = _item(db, "Code Sticker Pack")
    cap = _item(db, "CodeMaster Cap")
    user = make_user(db, "fan", points=1000)

    store_service.purchase(db, user.id, sticker.id)
    store_service.purchase(db, user.id, cap.id)
    result = store_service.purchase(db, user.id, sticker.id)

    assert result["points"] == 100
    assert [entry.item_id for entry in result["inventory"]] == [sticker.id, cap.id, sticker.id]
    spent = sum(entry.price_paid for entry in store_service.get_inventory(db, user.id))
    assert 1000 - spent == _balance(db, user.id)


def test_balance_gate_stops_second_purchase(db):
    store_service.reseed_catalog(db)
    sleeve = _item(db, "Laptop Sleeve")
    user = make_user(db, "halfway", points=2000)

    store_service.purchase(db, user.id, sleeve.id)
    with pytest.raises(InsufficientFundsError):
        store_service.purchase(db, user.id, sleeve.id)

    assert _balance(db, user.id) == 500
    assert len(store_service.get_inventory(db, user.id)) == 1
