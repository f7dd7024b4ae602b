# bikeshop/routers/shop_settings.py
"""Accessory prices (helmet, lock)."""

from fastapi import APIRouter, Depends
from bikeshop.schemas.shop_settings import ShopSettingsOut, ShopSettingsUpdate
from bikeshop.services import settings_service
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()


@router.get("/settings", response_model=ShopSettingsOut, summary="Accessory prices")
async def get_settings(store: ShopStore = Depends(get_store)):
    return await settings_service.get_shop_settings(store)


@router.put("/settings", response_model=ShopSettingsOut, summary="Update accessory prices")
async def update_settings(body: ShopSettingsUpdate, store: ShopStore = Depends(get_store)):
    """Only affects rentals created afterwards. Existing rentals keep their prices."""
    return await settings_service.update_shop_settings(store, body.model_dump(exclude_unset=True))
