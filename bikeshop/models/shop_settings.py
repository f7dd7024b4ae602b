# bikeshop/models/shop_settings.py
"""
Singleton settings row (id = 1) holding accessory prices.
Read by rental_service when a rental is created; see settings_service.
"""

from sqlalchemy import Column, Integer, Float, DateTime
from bikeshop.database import Base

SETTINGS_ROW_ID = 1


class ShopSettings(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    helmet_price = Column(Float, default=0.0, nullable=False)
    lock_price = Column(Float, default=0.0, nullable=False)
    updated_at = Column(DateTime)

    def __repr__(self):
        return f"<ShopSettings helmet={self.helmet_price} lock={self.lock_price}>"
