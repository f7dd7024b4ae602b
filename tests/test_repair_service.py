# tests/test_repair_service.py
"""Unit tests for repair tickets and their status lifecycle."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta, timezone
from bikeshop.services import repair_service
from bikeshop.services.errors import InvalidTransitionError, NotFoundError, ValidationError


class TestCreateRepair:
    @pytest.mark.asyncio
    async def test_defaults(self, store, customer):
        start = datetime(2024, 5, 1, 9)
        repair = await repair_service.create_repair(store, customer.id, " Giant Talon ", repair_start=start)

        assert repair.status == "pending"
        assert repair.bike_model == "Giant Talon"
        assert repair.price == 0.0
        assert repair.delivery_date == start + timedelta(minutes=60)
        assert repair.repair_end is None

    @pytest.mark.asyncio
    async def test_explicit_delivery_kept(self, store, customer):
        delivery = datetime(2024, 5, 3, 18)
        repair = await repair_service.create_repair(store, customer.id, "Brompton",
                                                    delivery_date=delivery, price=35.0, notes="gears")
        assert repair.delivery_date == delivery
        assert repair.notes == "gears"

    @pytest.mark.asyncio
    async def test_validation(self, store, customer):
        with pytest.raises(NotFoundError):
            await repair_service.create_repair(store, 77, "Brompton")
        with pytest.raises(ValidationError):
            await repair_service.create_repair(store, customer.id, "  ")
        with pytest.raises(ValidationError):
            await repair_service.create_repair(store, customer.id, "Brompton", price=-1)


    @pytest.mark.asyncio
    async def test_offset_dates_stored_as_utc(self, store, customer):
        plus_two = timezone(timedelta(hours=2))
        repair = await repair_service.create_repair(
            store, customer.id, "Brompton",
            repair_start=datetime(2024, 5, 1, 9, tzinfo=plus_two),
            delivery_date=datetime(2024, 5, 2, 18, tzinfo=plus_two),
        )
        assert repair.repair_start == datetime(2024, 5, 1, 7)
        assert repair.delivery_date == datetime(2024, 5, 2, 16)


class TestUpdateRepair:
    @pytest.mark.asyncio
    async def test_edit_details(self, store, customer, make_repair):
        repair = make_repair(customer.id)
        repair = await repair_service.update_repair(store, repair.id, {"price": 45.0, "notes": "new chain"})
        assert (repair.price, repair.notes) == (45.0, "new chain")

    @pytest.mark.asyncio
    async def test_status_not_editable(self, store, customer, make_repair):
        repair = make_repair(customer.id)
        with pytest.raises(ValidationError):
            await repair_service.update_repair(store, repair.id, {"status": "delivered"})
        assert repair.status == "pending"

    @pytest.mark.asyncio
    async def test_required_fields_cannot_be_cleared(self, store, customer, make_repair):
        repair = make_repair(customer.id, price=30.0)
        for field in ("bike_model", "repair_start", "price"):
            with pytest.raises(ValidationError):
                await repair_service.update_repair(store, repair.id, {field: None})
        assert repair.price == 30.0

    @pytest.mark.asyncio
    async def test_nullable_fields_can_be_cleared(self, store, customer, make_repair):
        repair = make_repair(customer.id)
        repair = await repair_service.update_repair(store, repair.id, {"notes": None, "delivery_date": None})
        assert repair.notes is None and repair.delivery_date is None

    @pytest.mark.asyncio
    async def test_edited_dates_converted_to_utc(self, store, customer, make_repair):
        repair = make_repair(customer.id)
        new_start = datetime(2024, 5, 1, 9, tzinfo=timezone(timedelta(hours=-3)))
        repair = await repair_service.update_repair(store, repair.id, {"repair_start": new_start})
        assert repair.repair_start == datetime(2024, 5, 1, 12)
        assert repair.status == "pending"


class TestRepairLifecycle:
    @pytest.mark.asyncio
    async def test_full_walk_stamps_dates(self, store, customer, make_repair):
        repair = make_repair(customer.id)

        repair = await repair_service.advance_repair(store, repair.id)
        assert repair.status == "in progress"
        assert repair.repair_end is None

        repair = await repair_service.advance_repair(store, repair.id)
        assert repair.status == "completed"
        assert repair.repair_end is not None

        repair = await repair_service.advance_repair(store, repair.id)
        assert repair.status == "delivered"

        with pytest.raises(InvalidTransitionError):
            await repair_service.advance_repair(store, repair.id)

    @pytest.mark.asyncio
    async def test_cancel(self, store, customer, make_repair):
        repair = make_repair(customer.id, status="in progress")
        repair = await repair_service.cancel_repair(store, repair.id)
        assert repair.status == "canceled"
        assert repair.repair_end is not None

        with pytest.raises(InvalidTransitionError):
            await repair_service.cancel_repair(store, repair.id)

    @pytest.mark.asyncio
    async def test_delivered_cannot_be_canceled(self, store, customer, make_repair):
        repair = make_repair(customer.id, status="delivered")
        with pytest.raises(InvalidTransitionError):
            await repair_service.cancel_repair(store, repair.id)

    @pytest.mark.asyncio
    async def test_open_and_history_lists(self, store, customer, make_repair):
        pending = make_repair(customer.id, status="pending")
        done = make_repair(customer.id, status="completed")
        make_repair(customer.id, status="delivered")
        make_repair(customer.id, status="canceled")

        open_ids = {r.id for r in await repair_service.list_open_repairs(store)}
        history = await repair_service.list_repair_history(store)

        assert open_ids == {pending.id, done.id}
        assert {r.status for r in history} == {"delivered", "canceled"}
