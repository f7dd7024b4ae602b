# tests/test_settings_service.py
"""Unit tests for accessory price settings."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, patch
from bikeshop.services import settings_service
from bikeshop.services.errors import RecordInUseError, ValidationError


class TestSettingsService:
    @pytest.mark.asyncio
    async def test_row_created_from_defaults(self, store):
        with patch.object(settings_service.settings, "DEFAULT_HELMET_PRICE", 2.5), \
             patch.object(settings_service.settings, "DEFAULT_LOCK_PRICE", 1.0):
            row = await settings_service.get_shop_settings(store)

        assert row.id == 1
        assert (row.helmet_price, row.lock_price) == (2.5, 1.0)
        assert await settings_service.get_shop_settings(store) is row

    @pytest.mark.asyncio
    async def test_partial_update(self, store):
        await settings_service.update_shop_settings(store, {"helmet_price": 3.0, "lock_price": 4.0})
        row = await settings_service.update_shop_settings(store, {"lock_price": 5.0, "helmet_price": None})

        assert (row.helmet_price, row.lock_price) == (3.0, 5.0)
        assert row.updated_at is not None

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, store):
        with pytest.raises(ValidationError):
            await settings_service.update_shop_settings(store, {"helmet_price": -1})

    @pytest.mark.asyncio
    async def test_concurrent_first_read_returns_existing_row(self):
        row = MagicMock(id=1, helmet_price=2.0, lock_price=1.0)
        store = MagicMock()
        store.settings.get.side_effect = [None, row]
        store.settings.insert.side_effect = RecordInUseError("settings: constraint violated")

        assert await settings_service.get_shop_settings(store) is row
        assert store.settings.get.call_count == 2
