from fastapi import APIRouter, Depends

from app.models.manager_stats import LeagueRecordRead, LeagueRecordsResponse
from app.routes.managers import get_snapshot, get_stats_service
from app.services.manager_stats.service import ManagerStatsService
from app.services.manager_stats.types import LeagueSnapshot

router = APIRouter(prefix="/api/records", tags=["records"])


@router.get("", response_model=LeagueRecordsResponse)
async def league_records(
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> LeagueRecordsResponse:
    """Automatic league records (most wins, trades, titles...) for the current data."""
    records = service.get_league_records(snapshot)
    return LeagueRecordsResponse(
        records=[
            LeagueRecordRead(
                id=record.id,
                title=record.title,
                value=record.value,
                holders=record.holders,
                kind=record.kind,
            )
            for record in records
        ]
    )
