# bikeshop/routers/rentals.py
"""Rental bookings — active list, history, create, advance, cancel."""

from fastapi import APIRouter, Depends, Query, status
from typing import Literal
from bikeshop.schemas.rental import RentalCreate, RentalOut
from bikeshop.services import rental_service
from bikeshop.services.rental_service import RentalLine
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()


@router.get("/rentals", response_model=list[RentalOut], summary="Active rentals")
async def list_rentals(store: ShopStore = Depends(get_store)):
    return await rental_service.list_active_rentals(store)


@router.get("/rentals/history", response_model=list[RentalOut], summary="Finished rentals")
async def rental_history(status_filter: Literal["all", "completed", "canceled"] = Query(default="all", alias="status"),
                         store: ShopStore = Depends(get_store)):
    return await rental_service.list_rental_history(store, status_filter)


@router.get("/rentals/{rental_id}", response_model=RentalOut)
async def get_rental(rental_id: int, store: ShopStore = Depends(get_store)):
    return await rental_service.get_rental(store, rental_id)


@router.post("/rentals", response_model=RentalOut, status_code=status.HTTP_201_CREATED,
             summary="Book a rental")
async def create_rental(body: RentalCreate, store: ShopStore = Depends(get_store)):
    lines = [RentalLine(i.bike_type_id, i.rental_pricing_id, i.quantity) for i in body.items]
    return await rental_service.create_rental(
        store, body.customer_id, lines,
        helmet_quantity=body.helmet_quantity,
        lock_quantity=body.lock_quantity,
        start_date=body.start_date,
    )


@router.post("/rentals/{rental_id}/advance", response_model=RentalOut,
             summary="Move a rental to its next status")
async def advance_rental(rental_id: int, store: ShopStore = Depends(get_store)):
    return await rental_service.advance_rental(store, rental_id)


@router.post("/rentals/{rental_id}/cancel", response_model=RentalOut, summary="Cancel a rental")
async def cancel_rental(rental_id: int, store: ShopStore = Depends(get_store)):
    return await rental_service.cancel_rental(store, rental_id)
