# tests/conftest.py
"""
Shared fixtures.

The environment is pinned before any bikeshop import so the app binds to an
in-memory SQLite database and logs into a throwaway directory. Service tests
use InMemoryStore, a dict-backed stand-in for ShopStore with the same query
vocabulary; API tests go through the real SQLAlchemy store.
"""

import os
import sys
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="bikeshop-logs-")
os.environ["API_KEY"] = ""
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime

import bikeshop.models  # noqa: F401  (registers every mapper)
from bikeshop.models import BikeType, Customer, RentalPricing, Repair


class InMemoryRepository:
    def __init__(self):
        self.rows = {}
        self._next_id = 1

    @staticmethod
    def _sort_key(col):
        def key(record):
            value = getattr(record, col)
            return (value is None, value if value is not None else 0)
        return key

    def find(self, eq=None, ne=None, in_=None, not_in=None, gte=None, lte=None,
             contains=None, order_by=None, descending=False, limit=None):
        rows = list(self.rows.values())
        for col, value in (eq or {}).items():
            rows = [r for r in rows if getattr(r, col) == value]
        for col, value in (ne or {}).items():
            rows = [r for r in rows if getattr(r, col) != value]
        for col, values in (in_ or {}).items():
            rows = [r for r in rows if getattr(r, col) in list(values)]
        for col, values in (not_in or {}).items():
            rows = [r for r in rows if getattr(r, col) not in list(values)]
        for col, value in (gte or {}).items():
            rows = [r for r in rows if getattr(r, col) is not None and getattr(r, col) >= value]
        for col, value in (lte or {}).items():
            rows = [r for r in rows if getattr(r, col) is not None and getattr(r, col) <= value]
        for cols, term in (contains or {}).items():
            rows = [r for r in rows
                    if any(term.lower() in (getattr(r, c) or "").lower() for c in cols)]
        if order_by:
            rows.sort(key=self._sort_key(order_by), reverse=descending)
        if limit:
            rows = rows[:limit]
        return rows

    def first(self, **filters):
        rows = self.find(limit=1, **filters)
        return rows[0] if rows else None

    def get(self, record_id):
        return self.rows.get(record_id)

    def insert(self, record):
        if record.id is None:
            record.id = self._next_id
        self._next_id = max(self._next_id, record.id) + 1
        self.rows[record.id] = record
        return record

    def update(self, record, changes):
        for col, value in changes.items():
            setattr(record, col, value)
        return record

    def delete(self, record):
        self.rows.pop(record.id, None)


class InMemoryStore:
    def __init__(self):
        self.customers = InMemoryRepository()
        self.bike_types = InMemoryRepository()
        self.pricing = InMemoryRepository()
        self.rentals = InMemoryRepository()
        self.repairs = InMemoryRepository()
        self.settings = InMemoryRepository()


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def customer(store):
    return store.customers.insert(Customer(
        name="Ana Pereira", email="ana@example.com", phone="912345678", created_at=datetime.utcnow(),
    ))


@pytest.fixture
def city_bike(store):
    return store.bike_types.insert(BikeType(type_name="City", created_at=datetime.utcnow()))


@pytest.fixture
def city_hourly(store, city_bike):
    """City bike, 2 hours for 10.0."""
    return store.pricing.insert(RentalPricing(
        bike_type_id=city_bike.id, duration=2, duration_unit="hour", price=10.0, is_active=True,
    ))


@pytest.fixture
def make_repair(store):
    def _make(customer_id, status="pending", price=20.0, created_at=None):
        now = created_at or datetime.utcnow()
        return store.repairs.insert(Repair(
            customer_id=customer_id, bike_model="Trek FX", repair_start=now,
            price=price, status=status, notes="", created_at=now,
        ))
    return _make
