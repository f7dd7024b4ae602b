# tests/test_rental_service.py
"""Unit tests for rental bookings and their status lifecycle."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from datetime import datetime, timedelta, timezone
from bikeshop.models import RentalPricing
from bikeshop.services import rental_service, settings_service
from bikeshop.services.errors import InvalidTransitionError, NotFoundError, ValidationError
from bikeshop.services.rental_service import RentalLine


class TestCreateRental:
    @pytest.mark.asyncio
    async def test_totals_and_accessory_snapshot(self, store, customer, city_bike, city_hourly):
        await settings_service.update_shop_settings(store, {"helmet_price": 2.0, "lock_price": 1.5})
        start = datetime(2024, 3, 1, 10)

        rental = await rental_service.create_rental(
            store, customer.id, [RentalLine(city_bike.id, city_hourly.id, 2)],
            helmet_quantity=2, lock_quantity=1, start_date=start,
        )

        assert rental.status == "active"
        assert rental.total_amount == 2 * 10.0 + 2 * 2.0 + 1.5
        assert rental.end_date == datetime(2024, 3, 1, 12)

        # Later price edits do not reach existing rentals
        await settings_service.update_shop_settings(store, {"helmet_price": 9.0})
        assert rental.helmet_price == 2.0
        assert rental.total_amount == 25.5

    @pytest.mark.asyncio
    async def test_offset_start_stored_as_utc(self, store, customer, city_bike, city_hourly):
        start = datetime(2024, 3, 1, 10, tzinfo=timezone(timedelta(hours=2)))
        rental = await rental_service.create_rental(
            store, customer.id, [RentalLine(city_bike.id, city_hourly.id)], start_date=start,
        )
        assert rental.start_date == datetime(2024, 3, 1, 8)
        assert rental.end_date == datetime(2024, 3, 1, 10)

    @pytest.mark.asyncio
    async def test_several_bike_types(self, store, customer, city_bike, city_hourly):
        ebike = store.pricing.insert(RentalPricing(bike_type_id=7, duration=1, duration_unit="day",
                                                   price=40.0, is_active=True))
        rental = await rental_service.create_rental(
            store, customer.id,
            [RentalLine(city_bike.id, city_hourly.id, 1), RentalLine(7, ebike.id, 1)],
        )
        assert len(rental.items) == 2
        assert rental.total_amount == 50.0

    @pytest.mark.asyncio
    async def test_unknown_customer(self, store, city_bike, city_hourly):
        with pytest.raises(NotFoundError):
            await rental_service.create_rental(store, 5, [RentalLine(city_bike.id, city_hourly.id)])

    @pytest.mark.asyncio
    async def test_needs_a_bike(self, store, customer):
        with pytest.raises(ValidationError):
            await rental_service.create_rental(store, customer.id, [])

    @pytest.mark.asyncio
    async def test_inactive_tariff_rejected(self, store, customer, city_bike, city_hourly):
        city_hourly.is_active = False
        with pytest.raises(ValidationError):
            await rental_service.create_rental(store, customer.id, [RentalLine(city_bike.id, city_hourly.id)])

    @pytest.mark.asyncio
    async def test_tariff_must_match_bike_type(self, store, customer, city_hourly):
        with pytest.raises(ValidationError):
            await rental_service.create_rental(store, customer.id, [RentalLine(99, city_hourly.id)])

    @pytest.mark.asyncio
    async def test_negative_accessories(self, store, customer, city_bike, city_hourly):
        with pytest.raises(ValidationError):
            await rental_service.create_rental(store, customer.id, [RentalLine(city_bike.id, city_hourly.id)],
                                               helmet_quantity=-1)


class TestRentalLifecycle:
    @pytest.fixture
    def book(self, store, customer, city_bike, city_hourly):
        async def _book():
            return await rental_service.create_rental(store, customer.id, [RentalLine(city_bike.id, city_hourly.id)])
        return _book

    @pytest.mark.asyncio
    async def test_advance_then_history(self, store, book):
        rental = await book()
        rental = await rental_service.advance_rental(store, rental.id)
        assert rental.status == "completed"

        assert await rental_service.list_active_rentals(store) == []
        assert [r.id for r in await rental_service.list_rental_history(store)] == [rental.id]
        assert [r.id for r in await rental_service.list_rental_history(store, "completed")] == [rental.id]
        assert await rental_service.list_rental_history(store, "canceled") == []

    @pytest.mark.asyncio
    async def test_canceled_is_final(self, store, book):
        rental = await book()
        await rental_service.cancel_rental(store, rental.id)

        with pytest.raises(InvalidTransitionError):
            await rental_service.advance_rental(store, rental.id)
        with pytest.raises(InvalidTransitionError):
            await rental_service.cancel_rental(store, rental.id)

    @pytest.mark.asyncio
    async def test_bad_history_filter(self, store):
        with pytest.raises(ValidationError):
            await rental_service.list_rental_history(store, "active")

    @pytest.mark.asyncio
    async def test_missing_rental(self, store):
        with pytest.raises(NotFoundError):
            await rental_service.advance_rental(store, 404)
