# bikeshop/routers/repairs.py
"""Repair tickets — open list, history, create, edit, advance, cancel."""

from fastapi import APIRouter, Depends, status
from bikeshop.schemas.repair import RepairCreate, RepairOut, RepairUpdate
from bikeshop.services import repair_service
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()


@router.get("/repairs", response_model=list[RepairOut], summary="Open repairs")
async def list_repairs(store: ShopStore = Depends(get_store)):
    """Tickets not yet delivered or canceled, newest first."""
    return await repair_service.list_open_repairs(store)


@router.get("/repairs/history", response_model=list[RepairOut], summary="Closed repairs")
async def repair_history(store: ShopStore = Depends(get_store)):
    return await repair_service.list_repair_history(store)


@router.get("/repairs/{repair_id}", response_model=RepairOut)
async def get_repair(repair_id: int, store: ShopStore = Depends(get_store)):
    return await repair_service.get_repair(store, repair_id)


@router.post("/repairs", response_model=RepairOut, status_code=status.HTTP_201_CREATED,
             summary="Open a repair ticket")
async def create_repair(body: RepairCreate, store: ShopStore = Depends(get_store)):
    return await repair_service.create_repair(
        store, body.customer_id, body.bike_model,
        repair_start=body.repair_start,
        delivery_date=body.delivery_date,
        price=body.price,
        notes=body.notes,
    )


@router.put("/repairs/{repair_id}", response_model=RepairOut, summary="Edit a repair ticket")
async def update_repair(repair_id: int, body: RepairUpdate, store: ShopStore = Depends(get_store)):
    return await repair_service.update_repair(store, repair_id, body.model_dump(exclude_unset=True))


@router.post("/repairs/{repair_id}/advance", response_model=RepairOut,
             summary="Move a repair to its next status")
async def advance_repair(repair_id: int, store: ShopStore = Depends(get_store)):
    return await repair_service.advance_repair(store, repair_id)


@router.post("/repairs/{repair_id}/cancel", response_model=RepairOut, summary="Cancel a repair")
async def cancel_repair(repair_id: int, store: ShopStore = Depends(get_store)):
    return await repair_service.cancel_repair(store, repair_id)
