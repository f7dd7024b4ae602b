# bikeshop/utils/shop_rules.py
"""
Shop business rules: status transition tables, rental end-date arithmetic,
customer delete guard and revenue aggregation.

Pure functions over plain values and dataclasses. Nothing in here touches the
database, the config or the logger, so services feed it rows they have
already fetched and tests call it directly.
"""

import calendar
import math
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Mapping, Optional

# ── Rental statuses ──────────────────────────────────────────────────────────
RENTAL_ACTIVE = "active"
RENTAL_COMPLETED = "completed"
RENTAL_CANCELED = "canceled"
RENTAL_STATUSES = (RENTAL_ACTIVE, RENTAL_COMPLETED, RENTAL_CANCELED)

RENTAL_NEXT_STATUS = {
    RENTAL_ACTIVE: RENTAL_COMPLETED,
    RENTAL_COMPLETED: RENTAL_CANCELED,
}

# ── Repair statuses ──────────────────────────────────────────────────────────
REPAIR_PENDING = "pending"
REPAIR_IN_PROGRESS = "in progress"
REPAIR_COMPLETED = "completed"
REPAIR_DELIVERED = "delivered"
REPAIR_CANCELED = "canceled"
REPAIR_STATUSES = (REPAIR_PENDING, REPAIR_IN_PROGRESS, REPAIR_COMPLETED,
                   REPAIR_DELIVERED, REPAIR_CANCELED)

REPAIR_NEXT_STATUS = {
    REPAIR_PENDING: REPAIR_IN_PROGRESS,
    REPAIR_IN_PROGRESS: REPAIR_COMPLETED,
    REPAIR_COMPLETED: REPAIR_DELIVERED,
}

REPAIR_TERMINAL_STATUSES = (REPAIR_DELIVERED, REPAIR_CANCELED)
REPAIR_REVENUE_STATUSES = (REPAIR_COMPLETED, REPAIR_DELIVERED)
# Repairs that no longer block deleting their customer
REPAIR_SETTLED_STATUSES = (REPAIR_COMPLETED, REPAIR_CANCELED)

# ── Durations / windows ──────────────────────────────────────────────────────
DURATION_UNITS = ("hour", "day", "week")
_MINUTES_PER_UNIT = {"hour": 60, "day": 24 * 60, "week": 7 * 24 * 60}

TIME_RANGES = ("week", "month", "year")


class InvalidTransition(ValueError):
    """Raised when a status has no allowed forward step or cannot be canceled."""


# ── Status transitions ───────────────────────────────────────────────────────

def _next_status(table: Mapping[str, str], known: Iterable[str], current: str) -> str:
    if current not in known:
        raise InvalidTransition(f"Unknown status '{current}'")
    nxt = table.get(current)
    if nxt is None:
        raise InvalidTransition(f"No status follows '{current}'")
    return nxt


def next_rental_status(current: str) -> str:
    return _next_status(RENTAL_NEXT_STATUS, RENTAL_STATUSES, current)


def next_repair_status(current: str) -> str:
    return _next_status(REPAIR_NEXT_STATUS, REPAIR_STATUSES, current)


def can_cancel_rental(current: str) -> bool:
    return current in RENTAL_STATUSES and current != RENTAL_CANCELED


def can_cancel_repair(current: str) -> bool:
    return current in REPAIR_STATUSES and current not in REPAIR_TERMINAL_STATUSES


def can_delete_customer(repair_statuses: Iterable[str], rental_statuses: Iterable[str]) -> bool:
    """Deletable only when every repair is completed or canceled and no rental is active."""
    if any(s not in REPAIR_SETTLED_STATUSES for s in repair_statuses):
        return False
    return not any(s == RENTAL_ACTIVE for s in rental_statuses)


# ── Date arithmetic ──────────────────────────────────────────────────────────

def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps are naive UTC. Aware inputs are converted, naive ones kept as given."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def end_date(start: datetime, duration: int, unit: str) -> datetime:
    """
    start + duration in the given unit. Plain wall-clock arithmetic:
    a week is 7 days and a day is 24 hours, DST is not considered.
    """
    if duration < 0:
        raise ValueError(f"Duration must not be negative, got {duration}")
    if unit == "hour":
        return start + timedelta(hours=duration)
    if unit == "day":
        return start + timedelta(days=duration)
    if unit == "week":
        return start + timedelta(days=duration * 7)
    raise ValueError(f"Unknown duration unit '{unit}'")


def duration_minutes(duration: int, unit: str) -> int:
    """Normalised length of a tariff, used to sort tariffs of the same bike type."""
    return duration * _MINUTES_PER_UNIT.get(unit, 0)


def _shift_months(dt: datetime, months: int) -> datetime:
    month_index = dt.year * 12 + (dt.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def window_start(now: datetime, time_range: str) -> datetime:
    """First instant of the trailing statistics window ending at `now`."""
    if time_range == "week":
        return now - timedelta(days=7)
    if time_range == "month":
        return _shift_months(now, -1)
    if time_range == "year":
        return _shift_months(now, -12)
    raise ValueError(f"Unknown time range '{time_range}'")


def month_key(dt: datetime) -> str:
    return dt.strftime("%Y-%m")


def average(total: float, count: int) -> float:
    return 0.0 if count == 0 else total / count


# ── Revenue records ──────────────────────────────────────────────────────────

@dataclass
class LineItem:
    bike_type_id: int
    unit_price: float
    quantity: int = 1

    @property
    def total(self) -> float:
        return self.unit_price * self.quantity


@dataclass
class RentalRecord:
    id: int
    created_at: datetime
    lines: list[LineItem] = field(default_factory=list)
    helmet_quantity: int = 0
    helmet_price: float = 0.0
    lock_quantity: int = 0
    lock_price: float = 0.0

    @property
    def items_total(self) -> float:
        return math.fsum(line.total for line in self.lines)

    @property
    def accessories_total(self) -> float:
        return math.fsum((self.helmet_price * self.helmet_quantity,
                          self.lock_price * self.lock_quantity))

    @property
    def total(self) -> float:
        return self.items_total + self.accessories_total


@dataclass
class RepairRecord:
    id: int
    status: str
    price: float
    created_at: datetime


@dataclass
class Bucket:
    key: str
    revenue: float
    count: int


@dataclass
class BikeTypeBucket:
    bike_type_id: int
    type_name: str
    revenue: float
    count: int


@dataclass
class RentalRevenue:
    total_revenue: float
    total_rentals: int
    average_price: float
    accessories_revenue: float
    by_bike_type: list[BikeTypeBucket]
    by_month: list[Bucket]


@dataclass
class RepairRevenue:
    total_revenue: float
    total_repairs: int
    average_price: float
    by_status: list[Bucket]
    by_month: list[Bucket]


def _month_buckets(entries: Iterable[tuple[str, float]]) -> list[Bucket]:
    grouped: dict[str, list[float]] = defaultdict(list)
    for key, amount in entries:
        grouped[key].append(amount)
    return [Bucket(key=k, revenue=math.fsum(v), count=len(v))
            for k, v in sorted(grouped.items(), reverse=True)]


def summarize_rentals(rentals: Iterable[RentalRecord],
                      bike_types: Optional[Mapping[int, str]] = None) -> RentalRevenue:
    """
    Revenue of a set of rentals. Every bike type in `bike_types` gets a bucket,
    even with no rentals; its count is the number of rentals containing it.
    Months are keyed on created_at, newest first.
    """
    rentals = list(rentals)
    bike_types = dict(bike_types or {})
    for rental in rentals:
        for line in rental.lines:
            bike_types.setdefault(line.bike_type_id, "")

    totals = [r.total for r in rentals]
    total_revenue = math.fsum(totals)

    by_type = []
    for type_id in sorted(bike_types):
        amounts = [line.total for r in rentals for line in r.lines if line.bike_type_id == type_id]
        count = sum(1 for r in rentals if any(line.bike_type_id == type_id for line in r.lines))
        by_type.append(BikeTypeBucket(bike_type_id=type_id, type_name=bike_types[type_id],
                                      revenue=math.fsum(amounts), count=count))

    return RentalRevenue(
        total_revenue=total_revenue,
        total_rentals=len(rentals),
        average_price=average(total_revenue, len(rentals)),
        accessories_revenue=math.fsum(r.accessories_total for r in rentals),
        by_bike_type=by_type,
        by_month=_month_buckets((month_key(r.created_at), r.total) for r in rentals),
    )


def summarize_repairs(repairs: Iterable[RepairRecord]) -> RepairRevenue:
    """Revenue of a set of repairs, by status (in lifecycle order) and by month."""
    repairs = list(repairs)
    total_revenue = math.fsum(r.price for r in repairs)

    by_status = []
    for status in REPAIR_STATUSES:
        prices = [r.price for r in repairs if r.status == status]
        if prices:
            by_status.append(Bucket(key=status, revenue=math.fsum(prices), count=len(prices)))

    return RepairRevenue(
        total_revenue=total_revenue,
        total_repairs=len(repairs),
        average_price=average(total_revenue, len(repairs)),
        by_status=by_status,
        by_month=_month_buckets((month_key(r.created_at), r.price) for r in repairs),
    )
