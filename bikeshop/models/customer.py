# bikeshop/models/customer.py
"""
Customers table.
Referenced by rentals and repairs; deletion is guarded by customer_service.
"""

from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from bikeshop.database import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    email = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Customer {self.id} name={self.name}>"
