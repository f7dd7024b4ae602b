# bikeshop/models/rental.py
"""
Rentals and their line items.
A rental owns one or more RentalItem rows (bike type + tariff + quantity).
Helmet and lock unit prices are copied from the settings row when the rental
is created, so later settings edits do not change historical totals.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from bikeshop.database import Base
from bikeshop.utils.shop_rules import LineItem, RentalRecord, end_date


class Rental(Base):
    __tablename__ = "rentals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active", index=True)  # active | completed | canceled
    start_date = Column(DateTime, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    helmet_quantity = Column(Integer, default=0, nullable=False)
    lock_quantity = Column(Integer, default=0, nullable=False)
    helmet_price = Column(Float, default=0.0, nullable=False)
    lock_price = Column(Float, default=0.0, nullable=False)

    items = relationship("RentalItem", back_populates="rental", lazy="selectin",
                         cascade="all, delete-orphan")
    customer = relationship("Customer", lazy="joined")

    @property
    def customer_name(self):
        return self.customer.name if self.customer else None

    def to_record(self) -> RentalRecord:
        """Plain snapshot used by the revenue rules."""
        return RentalRecord(
            id=self.id,
            created_at=self.created_at,
            lines=[LineItem(bike_type_id=i.bike_type_id,
                            unit_price=i.pricing.price if i.pricing else 0.0,
                            quantity=i.quantity or 0)
                   for i in self.items],
            helmet_quantity=self.helmet_quantity or 0,
            helmet_price=self.helmet_price or 0.0,
            lock_quantity=self.lock_quantity or 0,
            lock_price=self.lock_price or 0.0,
        )

    @property
    def total_amount(self) -> float:
        return self.to_record().total

    @property
    def end_date(self):
        """Start plus the first item's tariff duration; None when it cannot be derived."""
        if not self.items or not self.items[0].pricing or not self.start_date:
            return None
        pricing = self.items[0].pricing
        try:
            return end_date(self.start_date, pricing.duration, pricing.duration_unit)
        except ValueError:
            return None

    def __repr__(self):
        return f"<Rental {self.id} customer={self.customer_id} status={self.status}>"


class RentalItem(Base):
    __tablename__ = "rental_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    rental_id = Column(Integer, ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False, index=True)
    bike_type_id = Column(Integer, ForeignKey("bike_types.id"), nullable=False)
    rental_pricing_id = Column(Integer, ForeignKey("rental_pricing.id"), nullable=False)
    quantity = Column(Integer, default=1, nullable=False)

    rental = relationship("Rental", back_populates="items")
    pricing = relationship("RentalPricing", lazy="joined")

    def __repr__(self):
        return f"<RentalItem {self.id} rental={self.rental_id} pricing={self.rental_pricing_id} x{self.quantity}>"
