# bikeshop/schemas/rental.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class RentalLineIn(BaseModel):
    bike_type_id: int
    rental_pricing_id: int
    quantity: int = Field(default=1, ge=1)


class RentalCreate(BaseModel):
    customer_id: int
    items: list[RentalLineIn] = Field(min_length=1)
    helmet_quantity: int = Field(default=0, ge=0)
    lock_quantity: int = Field(default=0, ge=0)
    start_date: Optional[datetime] = None   # defaults to now


class TariffSummary(BaseModel):
    duration: int
    duration_unit: str
    price: float

    class Config:
        from_attributes = True


class RentalItemOut(BaseModel):
    id: int
    bike_type_id: int
    rental_pricing_id: int
    quantity: int
    pricing: Optional[TariffSummary]

    class Config:
        from_attributes = True


class RentalOut(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    status: str
    start_date: datetime
    end_date: Optional[datetime] = None
    created_at: Optional[datetime]
    helmet_quantity: int
    lock_quantity: int
    helmet_price: float
    lock_price: float
    total_amount: float
    items: list[RentalItemOut]

    class Config:
        from_attributes = True
