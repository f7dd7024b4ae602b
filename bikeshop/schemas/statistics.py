# bikeshop/schemas/statistics.py
from pydantic import BaseModel


class BucketOut(BaseModel):
    key: str          # "YYYY-MM" for months, status name for statuses
    revenue: float
    count: int

    class Config:
        from_attributes = True


class BikeTypeBucketOut(BaseModel):
    bike_type_id: int
    type_name: str
    revenue: float
    count: int

    class Config:
        from_attributes = True


class RentalStatsOut(BaseModel):
    range: str
    total_revenue: float
    total_rentals: int
    average_price: float
    accessories_revenue: float
    by_bike_type: list[BikeTypeBucketOut]
    by_month: list[BucketOut]


class RepairStatsOut(BaseModel):
    range: str
    total_revenue: float
    total_repairs: int
    average_price: float
    by_status: list[BucketOut]
    by_month: list[BucketOut]
