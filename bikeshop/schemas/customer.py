# bikeshop/schemas/customer.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class CustomerCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str
    phone: str


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None


class CustomerOut(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
