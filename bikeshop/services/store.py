# bikeshop/services/store.py
"""
Repository layer between the services and SQLAlchemy.

Each entity gets a Repository with the same small query vocabulary the
services need: equality, membership and range filters plus ordering. ShopStore
bundles one repository per table around a request session; tests swap it for
an in-memory double with the same interface.

Every call is wrapped: database failures are logged, the session is rolled
back and a StoreError is raised. No retries.
"""

from typing import Any, Optional
from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bikeshop.database import get_db
from bikeshop.models import BikeType, Customer, Rental, RentalPricing, Repair, ShopSettings
from bikeshop.services.errors import RecordInUseError, StoreError
from bikeshop.utils.logger import get_logger

logger = get_logger(__name__)


class Repository:
    def __init__(self, db: Session, model):
        self.db = db
        self.model = model
        self.name = model.__tablename__

    def _fail(self, action: str, exc: Exception):
        self.db.rollback()
        logger.error(f"[STORE] {action} on {self.name} failed: {exc}", exc_info=True)
        if isinstance(exc, IntegrityError):
            raise RecordInUseError(f"{self.name}: constraint violated") from exc
        raise StoreError(f"Database error while accessing {self.name}") from exc

    def find(
        self,
        eq: Optional[dict] = None,
        ne: Optional[dict] = None,
        in_: Optional[dict] = None,
        not_in: Optional[dict] = None,
        gte: Optional[dict] = None,
        lte: Optional[dict] = None,
        contains: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list:
        """
        Rows matching every filter. Each filter maps column name → value(s),
        except `contains`, which maps a tuple of column names to a term matched
        case-insensitively as a substring of any of them.
        """
        q = self.db.query(self.model)
        for col, value in (eq or {}).items():
            q = q.filter(getattr(self.model, col) == value)
        for col, value in (ne or {}).items():
            q = q.filter(getattr(self.model, col) != value)
        for col, values in (in_ or {}).items():
            q = q.filter(getattr(self.model, col).in_(list(values)))
        for col, values in (not_in or {}).items():
            q = q.filter(getattr(self.model, col).notin_(list(values)))
        for col, value in (gte or {}).items():
            q = q.filter(getattr(self.model, col) >= value)
        for col, value in (lte or {}).items():
            q = q.filter(getattr(self.model, col) <= value)
        for cols, term in (contains or {}).items():
            q = q.filter(or_(*(getattr(self.model, c).icontains(term, autoescape=True) for c in cols)))
        if order_by:
            column = getattr(self.model, order_by)
            q = q.order_by(column.desc() if descending else column.asc())
        if limit:
            q = q.limit(limit)
        try:
            return q.all()
        except SQLAlchemyError as e:
            self._fail("select", e)

    def first(self, **filters) -> Optional[Any]:
        rows = self.find(limit=1, **filters)
        return rows[0] if rows else None

    def get(self, record_id: int) -> Optional[Any]:
        try:
            return self.db.get(self.model, record_id)
        except SQLAlchemyError as e:
            self._fail("get", e)

    def insert(self, record):
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail("insert", e)
        return record

    def update(self, record, changes: dict):
        for col, value in changes.items():
            setattr(record, col, value)
        try:
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self._fail("update", e)
        return record

    def delete(self, record):
        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail("delete", e)


class ShopStore:
    """One repository per table, all sharing the request's session."""

    def __init__(self, db: Session):
        self.db = db
        self.customers = Repository(db, Customer)
        self.bike_types = Repository(db, BikeType)
        self.pricing = Repository(db, RentalPricing)
        self.rentals = Repository(db, Rental)
        self.repairs = Repository(db, Repair)
        self.settings = Repository(db, ShopSettings)


def get_store(db: Session = Depends(get_db)) -> ShopStore:
    """FastAPI dependency — a ShopStore around the request session."""
    return ShopStore(db)
