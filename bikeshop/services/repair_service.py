# bikeshop/services/repair_service.py
"""
Repair tickets.

Advance: pending → in progress → completed → delivered.
         Entering completed stamps repair_end; entering delivered stamps delivery_date.
Cancel:  from pending, in progress or completed; stamps repair_end.
"""

from datetime import datetime, timedelta
from typing import Optional

from bikeshop.config import settings
from bikeshop.models.repair import Repair
from bikeshop.services.errors import InvalidTransitionError, NotFoundError, ValidationError
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger
from bikeshop.utils.shop_rules import (
    REPAIR_CANCELED, REPAIR_COMPLETED, REPAIR_DELIVERED, REPAIR_PENDING, REPAIR_TERMINAL_STATUSES,
    InvalidTransition, can_cancel_repair, next_repair_status, to_utc_naive,
)

logger = get_logger(__name__)

EDITABLE_FIELDS = ("bike_model", "repair_start", "delivery_date", "price", "notes")
REQUIRED_FIELDS = ("bike_model", "repair_start", "price")
DATE_FIELDS = ("repair_start", "delivery_date")


async def list_open_repairs(store: ShopStore) -> list[Repair]:
    return store.repairs.find(not_in={"status": REPAIR_TERMINAL_STATUSES},
                              order_by="created_at", descending=True)


async def list_repair_history(store: ShopStore) -> list[Repair]:
    return store.repairs.find(in_={"status": REPAIR_TERMINAL_STATUSES},
                              order_by="repair_end", descending=True)


async def get_repair(store: ShopStore, repair_id: int) -> Repair:
    repair = store.repairs.get(repair_id)
    if not repair:
        raise NotFoundError(f"Repair {repair_id} not found")
    return repair


async def create_repair(store: ShopStore, customer_id: int, bike_model: str,
                        repair_start: Optional[datetime] = None,
                        delivery_date: Optional[datetime] = None,
                        price: Optional[float] = None,
                        notes: Optional[str] = None) -> Repair:
    if not store.customers.get(customer_id):
        raise NotFoundError(f"Customer {customer_id} not found")
    if not bike_model or not bike_model.strip():
        raise ValidationError("Bike model is required")
    price = price or 0.0
    if price < 0:
        raise ValidationError("Price must not be negative")

    now = datetime.utcnow()
    start = to_utc_naive(repair_start) or now
    delivery_date = to_utc_naive(delivery_date)
    if delivery_date is None:
        delivery_date = start + timedelta(minutes=settings.REPAIR_DEFAULT_TURNAROUND_MINUTES)

    repair = store.repairs.insert(Repair(
        customer_id=customer_id,
        bike_model=bike_model.strip(),
        repair_start=start,
        delivery_date=delivery_date,
        price=price,
        notes=notes or "",
        status=REPAIR_PENDING,
        created_at=now,
    ))
    logger.info(f"[REPAIR] Created {repair.id} for customer {customer_id}: {repair.bike_model}")
    return repair


async def update_repair(store: ShopStore, repair_id: int, changes: dict) -> Repair:
    """Edit ticket details. Status only moves through advance/cancel."""
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")
    cleared = [f for f in REQUIRED_FIELDS if f in changes and changes[f] is None]
    if cleared:
        raise ValidationError(f"Fields cannot be empty: {', '.join(cleared)}")
    if changes.get("price") is not None and changes["price"] < 0:
        raise ValidationError("Price must not be negative")

    changes = {k: to_utc_naive(v) if k in DATE_FIELDS else v for k, v in changes.items()}
    repair = await get_repair(store, repair_id)
    return store.repairs.update(repair, changes)


async def advance_repair(store: ShopStore, repair_id: int) -> Repair:
    repair = await get_repair(store, repair_id)
    try:
        nxt = next_repair_status(repair.status)
    except InvalidTransition as e:
        raise InvalidTransitionError(str(e)) from e

    changes = {"status": nxt}
    if nxt == REPAIR_COMPLETED:
        changes["repair_end"] = datetime.utcnow()
    elif nxt == REPAIR_DELIVERED:
        changes["delivery_date"] = datetime.utcnow()

    previous = repair.status
    repair = store.repairs.update(repair, changes)
    logger.info(f"[REPAIR] {repair_id}: {previous} → {nxt}")
    return repair


async def cancel_repair(store: ShopStore, repair_id: int) -> Repair:
    repair = await get_repair(store, repair_id)
    if not can_cancel_repair(repair.status):
        raise InvalidTransitionError(f"Repair {repair_id} is already {repair.status}")

    previous = repair.status
    repair = store.repairs.update(repair, {"status": REPAIR_CANCELED, "repair_end": datetime.utcnow()})
    logger.info(f"[REPAIR] {repair_id}: {previous} → {REPAIR_CANCELED}")
    return repair
