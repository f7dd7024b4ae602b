# bikeshop/models/bike_type.py
"""Bike categories offered for rental (e.g. Mountain, City)."""

from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from bikeshop.database import Base


class BikeType(Base):
    __tablename__ = "bike_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type_name = Column(String(100), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<BikeType {self.id} {self.type_name}>"
