# bikeshop/services/settings_service.py
"""Accessory price settings (single row, created from config defaults on first read)."""

from datetime import datetime

from bikeshop.config import settings
from bikeshop.models.shop_settings import SETTINGS_ROW_ID, ShopSettings
from bikeshop.services.errors import RecordInUseError, ValidationError
from bikeshop.services.store import ShopStore
from bikeshop.utils.logger import get_logger

logger = get_logger(__name__)


async def get_shop_settings(store: ShopStore) -> ShopSettings:
    row = store.settings.get(SETTINGS_ROW_ID)
    if row is not None:
        return row
    try:
        row = store.settings.insert(ShopSettings(
            id=SETTINGS_ROW_ID,
            helmet_price=settings.DEFAULT_HELMET_PRICE,
            lock_price=settings.DEFAULT_LOCK_PRICE,
            updated_at=datetime.utcnow(),
        ))
    except RecordInUseError:
        # Another request created the row first
        logger.info("[SETTINGS] Settings row created concurrently, reading it back")
        return store.settings.get(SETTINGS_ROW_ID)
    logger.info(f"[SETTINGS] Created settings row: {row}")
    return row


async def update_shop_settings(store: ShopStore, changes: dict) -> ShopSettings:
    for key in ("helmet_price", "lock_price"):
        if changes.get(key) is not None and changes[key] < 0:
            raise ValidationError(f"{key} must not be negative")
    changes = {k: v for k, v in changes.items() if v is not None}

    row = await get_shop_settings(store)
    row = store.settings.update(row, {**changes, "updated_at": datetime.utcnow()})
    logger.info(f"[SETTINGS] Updated: {row}")
    return row
