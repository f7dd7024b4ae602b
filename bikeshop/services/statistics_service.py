# bikeshop/services/statistics_service.py
"""
Revenue statistics over a trailing window (week / month / year before now).

Rentals:  completed rentals whose start_date falls in the window.
Repairs:  completed or delivered repairs whose created_at falls in the window.
The arithmetic lives in shop_rules; this module only selects the rows.
"""

from datetime import datetime
from typing import Optional

from bikeshop.services.errors import ValidationError
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger
from bikeshop.utils.shop_rules import (
    REPAIR_REVENUE_STATUSES, RENTAL_COMPLETED, TIME_RANGES,
    RentalRevenue, RepairRecord, RepairRevenue,
    summarize_rentals, summarize_repairs, window_start,
)

logger = get_logger(__name__)


def _window(time_range: str, now: Optional[datetime]) -> tuple[datetime, datetime]:
    if time_range not in TIME_RANGES:
        raise ValidationError(f"Range must be one of {', '.join(TIME_RANGES)}")
    now = now or datetime.utcnow()
    return window_start(now, time_range), now


async def rental_revenue(store: ShopStore, time_range: str,
                         now: Optional[datetime] = None) -> RentalRevenue:
    start, end = _window(time_range, now)
    rentals = store.rentals.find(eq={"status": RENTAL_COMPLETED},
                                 gte={"start_date": start}, lte={"start_date": end})
    bike_types = {t.id: t.type_name for t in store.bike_types.find()}

    stats = summarize_rentals([r.to_record() for r in rentals], bike_types)
    logger.debug(f"[STATS] Rentals {time_range}: {stats.total_rentals} rentals, revenue={stats.total_revenue:.2f}")
    return stats


async def repair_revenue(store: ShopStore, time_range: str,
                         now: Optional[datetime] = None) -> RepairRevenue:
    start, end = _window(time_range, now)
    repairs = store.repairs.find(in_={"status": REPAIR_REVENUE_STATUSES},
                                 gte={"created_at": start}, lte={"created_at": end})

    stats = summarize_repairs(
        RepairRecord(id=r.id, status=r.status, price=r.price or 0.0, created_at=r.created_at)
        for r in repairs
    )
    logger.debug(f"[STATS] Repairs {time_range}: {stats.total_repairs} repairs, revenue={stats.total_revenue:.2f}")
    return stats
