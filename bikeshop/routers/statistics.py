# bikeshop/routers/statistics.py
"""Revenue statistics for rentals and repairs over a trailing window."""

from dataclasses import asdict
from fastapi import APIRouter, Depends, Query
from typing import Literal, Optional
from bikeshop.config import settings
from bikeshop.schemas.statistics import RentalStatsOut, RepairStatsOut
from bikeshop.services import statistics_service
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()

TimeRange = Literal["week", "month", "year"]


@router.get("/stats/rentals", response_model=RentalStatsOut, summary="Rental revenue")
async def rental_stats(time_range: Optional[TimeRange] = Query(default=None, alias="range"),
                       store: ShopStore = Depends(get_store)):
    """Completed rentals started in the window: totals, by bike type, by month."""
    time_range = time_range or settings.STATS_DEFAULT_RANGE
    stats = await statistics_service.rental_revenue(store, time_range)
    return {"range": time_range, **asdict(stats)}


@router.get("/stats/repairs", response_model=RepairStatsOut, summary="Repair revenue")
async def repair_stats(time_range: Optional[TimeRange] = Query(default=None, alias="range"),
                       store: ShopStore = Depends(get_store)):
    """Completed and delivered repairs opened in the window: totals, by status, by month."""
    time_range = time_range or settings.STATS_DEFAULT_RANGE
    stats = await statistics_service.repair_revenue(store, time_range)
    return {"range": time_range, **asdict(stats)}
