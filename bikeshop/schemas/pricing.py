# bikeshop/schemas/pricing.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class BikeTypeCreate(BaseModel):
    type_name: str = Field(min_length=1)


class BikeTypeOut(BaseModel):
    id: int
    type_name: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class PricingCreate(BaseModel):
    bike_type_id: int
    duration: int = Field(gt=0)
    duration_unit: Literal["hour", "day", "week"]
    price: float = Field(ge=0)


class PricingOut(BaseModel):
    id: int
    bike_type_id: int
    duration: int
    duration_unit: str
    price: float
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
