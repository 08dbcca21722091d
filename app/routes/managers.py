from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.models.manager_stats import (
    AwardGroupRead,
    ManagerAwardsResponse,
    ManagerRead,
    ManagerSeasonsResponse,
    ManagerStatsRead,
    ManagerStatsResponse,
    ManagerTitlesResponse,
    ManagerTradesResponse,
    RosterCardRead,
    RosterResponse,
    SeasonEntryRead,
    StandingRead,
    TeamRead,
    TitleRead,
    TradeLineRead,
)
from app.services.league_data_service import LeagueDataSource, fetch_snapshot, get_league_data_source
from app.services.manager_stats.awards import awards_total
from app.services.manager_stats.service import ManagerStatsService, default_service
from app.services.manager_stats.types import (
    EnrichedHistoryEntry,
    LeagueSnapshot,
    RosterTab,
    Team,
    as_count,
)

router = APIRouter(prefix="/api/managers", tags=["managers"])


def get_stats_service() -> ManagerStatsService:
    return default_service


async def get_snapshot(
    source: LeagueDataSource = Depends(get_league_data_source),
) -> LeagueSnapshot:
    """Fresh snapshot per request; views never share fetched collections."""
    return await fetch_snapshot(source)


def _team_read(team: Optional[Team]) -> Optional[TeamRead]:
    if team is None:
        return None
    return TeamRead(id=team.id, name=team.name, logo_url=team.logo_url)


def _season_entry_read(item: EnrichedHistoryEntry) -> SeasonEntryRead:
    standing = None
    if item.standing is not None:
        standing = StandingRead(
            trades_count=as_count(item.standing.trades_count),
            wins=as_count(item.standing.wins),
            losses=as_count(item.standing.losses),
            ties=as_count(item.standing.ties),
            position=item.standing.position,
        )
    return SeasonEntryRead(
        id=item.entry.id,
        year=item.entry.year,
        team_id=item.entry.team_id,
        team=_team_read(item.team),
        standing=standing,
    )


@router.get("", response_model=RosterResponse)
async def list_managers(
    tab: RosterTab = Query(RosterTab.active, description="active or legend"),
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
    page: int = Query(1, description="Out-of-range pages are clamped"),
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> RosterResponse:
    """Managers list with the same stats the detail view shows."""
    roster = service.get_roster(snapshot, tab=tab, search=q, page=page)
    return RosterResponse(
        tab=roster.tab,
        page=roster.page,
        total_pages=roster.total_pages,
        total=roster.total,
        cards=[
            RosterCardRead(
                manager=ManagerRead.from_manager(card.manager),
                current_team=_team_read(card.current_team),
                stats=ManagerStatsRead.from_stats(card.stats),
            )
            for card in roster.cards
        ],
    )


@router.get("/{manager_id}/stats", response_model=ManagerStatsResponse)
async def manager_stats(
    manager_id: str,
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> ManagerStatsResponse:
    """Aggregated statistics; unknown managers get all-zero stats, not a 404."""
    manager = snapshot.manager(manager_id)
    stats = service.get_manager_stats(manager_id, snapshot)
    return ManagerStatsResponse(
        manager_id=manager_id,
        manager=ManagerRead.from_manager(manager) if manager else None,
        stats=ManagerStatsRead.from_stats(stats),
    )


@router.get("/{manager_id}/seasons", response_model=ManagerSeasonsResponse)
async def manager_seasons(
    manager_id: str,
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> ManagerSeasonsResponse:
    entries = service.get_enriched_history(manager_id, snapshot)
    return ManagerSeasonsResponse(
        manager_id=manager_id,
        seasons=[_season_entry_read(item) for item in entries],
    )


@router.get("/{manager_id}/titles", response_model=ManagerTitlesResponse)
async def manager_titles(
    manager_id: str,
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> ManagerTitlesResponse:
    titles = service.get_manager_titles(manager_id, snapshot)
    return ManagerTitlesResponse(
        manager_id=manager_id,
        titles=[TitleRead(id=title.id, year=title.year, team=title.team) for title in titles],
        total=len(titles),
    )


@router.get("/{manager_id}/trades", response_model=ManagerTradesResponse)
async def manager_trades(
    manager_id: str,
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> ManagerTradesResponse:
    breakdown = service.get_trade_breakdown(manager_id, snapshot)
    return ManagerTradesResponse(
        manager_id=manager_id,
        lines=[
            TradeLineRead(
                year=line.year,
                team_id=line.team_id,
                team_name=line.team_name,
                count=line.count,
                logo_url=line.logo_url,
            )
            for line in breakdown.lines
        ],
        total=breakdown.total,
    )


@router.get("/{manager_id}/awards", response_model=ManagerAwardsResponse)
async def manager_awards(
    manager_id: str,
    snapshot: LeagueSnapshot = Depends(get_snapshot),
    service: ManagerStatsService = Depends(get_stats_service),
) -> ManagerAwardsResponse:
    groups = service.get_grouped_awards(manager_id, snapshot)
    return ManagerAwardsResponse(
        manager_id=manager_id,
        groups=[
            AwardGroupRead(category=group.category, years=list(group.years), count=group.count)
            for group in groups
        ],
        total=awards_total(groups),
    )
