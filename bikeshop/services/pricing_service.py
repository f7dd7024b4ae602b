# bikeshop/services/pricing_service.py
"""
Bike types and their rental tariffs.
Tariffs are soft-deleted (is_active = False) so existing rental items keep a
valid price reference.
"""

from datetime import datetime
from typing import Optional

from bikeshop.models.bike_type import BikeType
from bikeshop.models.rental_pricing import RentalPricing
from bikeshop.services.errors import NotFoundError, RecordInUseError, ValidationError
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger
from bikeshop.utils.shop_rules import DURATION_UNITS

logger = get_logger(__name__)


# ── Bike types ───────────────────────────────────────────────────────────────

async def list_bike_types(store: ShopStore) -> list[BikeType]:
    return store.bike_types.find(order_by="type_name")


async def create_bike_type(store: ShopStore, type_name: str) -> BikeType:
    type_name = type_name.strip()
    if not type_name:
        raise ValidationError("Bike type name is required")
    if store.bike_types.first(eq={"type_name": type_name}):
        raise RecordInUseError(f"Bike type '{type_name}' already exists")
    bike_type = store.bike_types.insert(BikeType(type_name=type_name, created_at=datetime.utcnow()))
    logger.info(f"[PRICING] Bike type {bike_type.id} '{type_name}' created")
    return bike_type


async def delete_bike_type(store: ShopStore, bike_type_id: int):
    bike_type = store.bike_types.get(bike_type_id)
    if not bike_type:
        raise NotFoundError(f"Bike type {bike_type_id} not found")
    if store.pricing.first(eq={"bike_type_id": bike_type_id}):
        raise RecordInUseError("Bike type still has tariffs")
    store.bike_types.delete(bike_type)
    logger.info(f"[PRICING] Bike type {bike_type_id} deleted")


# ── Tariffs ──────────────────────────────────────────────────────────────────

async def list_pricing(store: ShopStore, bike_type_id: Optional[int] = None,
                       include_inactive: bool = False) -> list[RentalPricing]:
    """Tariffs ordered by bike type, then by normalised duration."""
    eq = {}
    if bike_type_id is not None:
        eq["bike_type_id"] = bike_type_id
    if not include_inactive:
        eq["is_active"] = True
    rows = store.pricing.find(eq=eq)
    return sorted(rows, key=lambda p: (p.bike_type_id, p.minutes))


async def create_pricing(store: ShopStore, bike_type_id: int, duration: int,
                         duration_unit: str, price: float) -> RentalPricing:
    if not store.bike_types.get(bike_type_id):
        raise NotFoundError(f"Bike type {bike_type_id} not found")
    if duration <= 0:
        raise ValidationError("Duration must be positive")
    if duration_unit not in DURATION_UNITS:
        raise ValidationError(f"Duration unit must be one of {', '.join(DURATION_UNITS)}")
    if price < 0:
        raise ValidationError("Price must not be negative")

    now = datetime.utcnow()
    pricing = store.pricing.insert(RentalPricing(
        bike_type_id=bike_type_id, duration=duration, duration_unit=duration_unit,
        price=price, is_active=True, created_at=now, updated_at=now,
    ))
    logger.info(f"[PRICING] Tariff {pricing.id}: type={bike_type_id} {duration} {duration_unit} = {price}")
    return pricing


async def deactivate_pricing(store: ShopStore, pricing_id: int) -> RentalPricing:
    pricing = store.pricing.get(pricing_id)
    if not pricing:
        raise NotFoundError(f"Tariff {pricing_id} not found")
    pricing = store.pricing.update(pricing, {"is_active": False, "updated_at": datetime.utcnow()})
    logger.info(f"[PRICING] Tariff {pricing_id} deactivated")
    return pricing
