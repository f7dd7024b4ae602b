# bikeshop/services/customer_service.py
"""
Customer records.
Listing hides the walk-in placeholder customer. Deleting is refused while the
customer has a repair that is not completed or canceled, or a rental out.

The delete guard is two reads followed by the delete, not one transaction:
a rental or repair inserted in between is not seen.
"""

from datetime import datetime
from typing import Optional

from bikeshop.config import settings
from bikeshop.models.customer import Customer
from bikeshop.services.errors import CustomerInUseError, NotFoundError, ValidationError
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger
from bikeshop.utils.shop_rules import REPAIR_SETTLED_STATUSES, RENTAL_ACTIVE, can_delete_customer

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone")


async def list_customers(store: ShopStore, search: Optional[str] = None) -> list[Customer]:
    """Customers by name, anonymous placeholder excluded. `search` matches name or email."""
    contains = {("name", "email"): search} if search else None
    return store.customers.find(ne={"name": settings.ANONYMOUS_CUSTOMER_NAME},
                                contains=contains, order_by="name")


async def get_customer(store: ShopStore, customer_id: int) -> Customer:
    customer = store.customers.get(customer_id)
    if not customer:
        raise NotFoundError(f"Customer {customer_id} not found")
    return customer


async def create_customer(store: ShopStore, name: str, email: str, phone: str) -> Customer:
    customer = store.customers.insert(Customer(
        name=name, email=email, phone=phone, created_at=datetime.utcnow(),
    ))
    logger.info(f"[CUSTOMER] Created {customer.id} ({customer.name})")
    return customer


async def update_customer(store: ShopStore, customer_id: int, changes: dict) -> Customer:
    cleared = [f for f in REQUIRED_FIELDS if f in changes and changes[f] is None]
    if cleared:
        raise ValidationError(f"Fields cannot be empty: {', '.join(cleared)}")

    customer = await get_customer(store, customer_id)
    return store.customers.update(customer, changes)


async def delete_customer(store: ShopStore, customer_id: int):
    customer = await get_customer(store, customer_id)

    blocking_repairs = store.repairs.find(eq={"customer_id": customer_id},
                                          not_in={"status": REPAIR_SETTLED_STATUSES})
    active_rentals = store.rentals.find(eq={"customer_id": customer_id, "status": RENTAL_ACTIVE})

    if not can_delete_customer([r.status for r in blocking_repairs], [r.status for r in active_rentals]):
        logger.warning(
            f"[CUSTOMER] Refused delete of {customer_id}: "
            f"{len(blocking_repairs)} unsettled repairs, {len(active_rentals)} active rentals"
        )
        raise CustomerInUseError("Cannot delete customer with active repairs or rentals")

    store.customers.delete(customer)
    logger.info(f"[CUSTOMER] Deleted {customer_id}")
