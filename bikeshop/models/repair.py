# bikeshop/models/repair.py
"""
Repair tickets. One bike, one flat price.
Status lifecycle: pending → in progress → completed → delivered, or canceled
from any of the first three (see utils/shop_rules.py).
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from bikeshop.database import Base


class Repair(Base):
    __tablename__ = "repairs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    bike_model = Column(String(200), nullable=False)
    repair_start = Column(DateTime, nullable=False)
    repair_end = Column(DateTime)               # set on completed / canceled
    delivery_date = Column(DateTime)            # planned, then actual on delivered
    price = Column(Float, default=0.0, nullable=False)
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    customer = relationship("Customer", lazy="joined")

    @property
    def customer_name(self):
        return self.customer.name if self.customer else None

    def __repr__(self):
        return f"<Repair {self.id} customer={self.customer_id} status={self.status}>"
