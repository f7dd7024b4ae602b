# bikeshop/models/rental_pricing.py
"""
Rental tariffs: a priced (duration, duration_unit) combination for one bike type.
Rows are never hard-deleted — rental items keep pointing at them, so removal
flips is_active instead.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from datetime import datetime
from bikeshop.database import Base
from bikeshop.utils.shop_rules import duration_minutes


class RentalPricing(Base):
    __tablename__ = "rental_pricing"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bike_type_id = Column(Integer, ForeignKey("bike_types.id"), nullable=False, index=True)
    duration = Column(Integer, nullable=False)
    duration_unit = Column(String(10), nullable=False)   # hour | day | week
    price = Column(Float, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, onupdate=datetime.utcnow)

    @property
    def minutes(self) -> int:
        return duration_minutes(self.duration, self.duration_unit)

    def __repr__(self):
        return (f"<RentalPricing {self.id} type={self.bike_type_id} "
                f"{self.duration} {self.duration_unit} = {self.price}>")
