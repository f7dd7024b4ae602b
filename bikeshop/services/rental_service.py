# bikeshop/services/rental_service.py
"""
Rental bookings.

Create:  customer + one or more (bike type, tariff, quantity) lines + helmet/lock
         counts. Accessory unit prices are copied from the settings row.
Advance: active → completed → canceled (see shop_rules.RENTAL_NEXT_STATUS).
Cancel:  from any state except canceled.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bikeshop.models.rental import Rental, RentalItem
from bikeshop.services.errors import InvalidTransitionError, NotFoundError, ValidationError
from bikeshop.services.settings_service import get_shop_settings
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger
from bikeshop.utils.shop_rules import (
    RENTAL_ACTIVE, RENTAL_CANCELED, RENTAL_STATUSES,
    InvalidTransition, can_cancel_rental, next_rental_status, to_utc_naive,
)

logger = get_logger(__name__)


@dataclass
class RentalLine:
    bike_type_id: int
    rental_pricing_id: int
    quantity: int = 1


async def list_active_rentals(store: ShopStore) -> list[Rental]:
    return store.rentals.find(eq={"status": RENTAL_ACTIVE}, order_by="created_at", descending=True)


async def list_rental_history(store: ShopStore, status: str = "all") -> list[Rental]:
    """Finished rentals, newest first. `status` narrows to completed or canceled."""
    if status == "all":
        return store.rentals.find(not_in={"status": [RENTAL_ACTIVE]},
                                  order_by="created_at", descending=True)
    if status not in RENTAL_STATUSES or status == RENTAL_ACTIVE:
        raise ValidationError(f"Unknown history filter '{status}'")
    return store.rentals.find(eq={"status": status}, order_by="created_at", descending=True)


async def get_rental(store: ShopStore, rental_id: int) -> Rental:
    rental = store.rentals.get(rental_id)
    if not rental:
        raise NotFoundError(f"Rental {rental_id} not found")
    return rental


async def create_rental(store: ShopStore, customer_id: int, lines: list[RentalLine],
                        helmet_quantity: int = 0, lock_quantity: int = 0,
                        start_date: Optional[datetime] = None) -> Rental:
    if not store.customers.get(customer_id):
        raise NotFoundError(f"Customer {customer_id} not found")
    if not lines:
        raise ValidationError("A rental needs at least one bike")
    if helmet_quantity < 0 or lock_quantity < 0:
        raise ValidationError("Accessory quantities must not be negative")

    items = []
    for line in lines:
        if line.quantity < 1:
            raise ValidationError("Bike quantity must be at least 1")
        pricing = store.pricing.get(line.rental_pricing_id)
        if not pricing or not pricing.is_active:
            raise ValidationError(f"Tariff {line.rental_pricing_id} is not available")
        if pricing.bike_type_id != line.bike_type_id:
            raise ValidationError(
                f"Tariff {line.rental_pricing_id} does not belong to bike type {line.bike_type_id}"
            )
        items.append(RentalItem(bike_type_id=line.bike_type_id,
                                rental_pricing_id=pricing.id,
                                quantity=line.quantity,
                                pricing=pricing))

    shop = await get_shop_settings(store)
    now = datetime.utcnow()
    rental = store.rentals.insert(Rental(
        customer_id=customer_id,
        status=RENTAL_ACTIVE,
        start_date=to_utc_naive(start_date) or now,
        created_at=now,
        helmet_quantity=helmet_quantity,
        lock_quantity=lock_quantity,
        helmet_price=shop.helmet_price,
        lock_price=shop.lock_price,
        items=items,
    ))
    logger.info(
        f"[RENTAL] Created {rental.id} for customer {customer_id}: "
        f"{len(items)} lines, total={rental.total_amount:.2f}"
    )
    return rental


async def advance_rental(store: ShopStore, rental_id: int) -> Rental:
    rental = await get_rental(store, rental_id)
    try:
        nxt = next_rental_status(rental.status)
    except InvalidTransition as e:
        raise InvalidTransitionError(str(e)) from e

    previous = rental.status
    rental = store.rentals.update(rental, {"status": nxt})
    logger.info(f"[RENTAL] {rental_id}: {previous} → {nxt}")
    return rental


async def cancel_rental(store: ShopStore, rental_id: int) -> Rental:
    rental = await get_rental(store, rental_id)
    if not can_cancel_rental(rental.status):
        raise InvalidTransitionError(f"Rental {rental_id} is already {rental.status}")

    previous = rental.status
    rental = store.rentals.update(rental, {"status": RENTAL_CANCELED})
    logger.info(f"[RENTAL] {rental_id}: {previous} → {RENTAL_CANCELED}")
    return rental
