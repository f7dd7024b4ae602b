# bikeshop/schemas/repair.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class RepairCreate(BaseModel):
    customer_id: int
    bike_model: str = Field(min_length=1)
    repair_start: Optional[datetime] = None     # defaults to now
    delivery_date: Optional[datetime] = None    # defaults to start + turnaround
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class RepairUpdate(BaseModel):
    bike_model: Optional[str] = Field(default=None, min_length=1)
    repair_start: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class RepairOut(BaseModel):
    id: int
    customer_id: int
    customer_name: Optional[str] = None
    bike_model: str
    repair_start: datetime
    repair_end: Optional[datetime]
    delivery_date: Optional[datetime]
    price: float
    notes: Optional[str]
    status: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
