from typing import List

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_store
from ..schemas.stats import DailyStat as DailyStatSchema, UserStats as UserStatsSchema
from ..store import EntityStore

router = APIRouter()


@router.get("/stats", response_model=UserStatsSchema)
def get_user_stats(store: EntityStore = Depends(get_store)):
    stats = store.get_user_stats()
    if stats is None:
        stats = store.init_user_stats()
    return stats


@router.get("/stats/daily", response_model=List[DailyStatSchema])
def get_daily_stats(
    days: int = Query(default=30, ge=1, le=366),
    store: EntityStore = Depends(get_store),
):
    """Most recent per-day completion counts, newest first."""
    return store.list_daily_stats(days)


@router.post("/stats/recount", response_model=UserStatsSchema)
def recount_stats(store: EntityStore = Depends(get_store)):
    """Rebuild every counter from the tasks table."""
    return store.recount_stats()
