# bikeshop/routers/pricing.py
"""Bike types and rental tariffs (the settings page of the dashboard)."""

from fastapi import APIRouter, Depends, status
from typing import Optional
from bikeshop.schemas.pricing import BikeTypeCreate, BikeTypeOut, PricingCreate, PricingOut
from bikeshop.services import pricing_service
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()


@router.get("/bike-types", response_model=list[BikeTypeOut], summary="List bike types")
async def list_bike_types(store: ShopStore = Depends(get_store)):
    return await pricing_service.list_bike_types(store)


@router.post("/bike-types", response_model=BikeTypeOut, status_code=status.HTTP_201_CREATED)
async def create_bike_type(body: BikeTypeCreate, store: ShopStore = Depends(get_store)):
    return await pricing_service.create_bike_type(store, body.type_name)


@router.delete("/bike-types/{bike_type_id}", summary="Remove a bike type without tariffs")
async def delete_bike_type(bike_type_id: int, store: ShopStore = Depends(get_store)):
    await pricing_service.delete_bike_type(store, bike_type_id)
    return {"id": bike_type_id, "status": "deleted"}


@router.get("/pricing", response_model=list[PricingOut], summary="List tariffs")
async def list_pricing(bike_type_id: Optional[int] = None, include_inactive: bool = False,
                       store: ShopStore = Depends(get_store)):
    """Tariffs by bike type, shortest duration first. Deactivated tariffs hidden by default."""
    return await pricing_service.list_pricing(store, bike_type_id, include_inactive)


@router.post("/pricing", response_model=PricingOut, status_code=status.HTTP_201_CREATED)
async def create_pricing(body: PricingCreate, store: ShopStore = Depends(get_store)):
    return await pricing_service.create_pricing(
        store, body.bike_type_id, body.duration, body.duration_unit, body.price
    )


@router.delete("/pricing/{pricing_id}", response_model=PricingOut, summary="Deactivate a tariff")
async def deactivate_pricing(pricing_id: int, store: ShopStore = Depends(get_store)):
    return await pricing_service.deactivate_pricing(store, pricing_id)
