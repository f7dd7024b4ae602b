# bikeshop/schemas/shop_settings.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class ShopSettingsOut(BaseModel):
    helmet_price: float
    lock_price: float
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ShopSettingsUpdate(BaseModel):
    helmet_price: Optional[float] = Field(default=None, ge=0)
    lock_price: Optional[float] = Field(default=None, ge=0)
