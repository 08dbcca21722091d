"""Single entry point for every view that shows manager statistics.

The detail, seasons, titles, trades, awards and list views all call through
:class:`ManagerStatsService`, so the numbers they show for one snapshot are
always the same numbers.
"""

from __future__ import annotations

from typing import List, Optional

from app.config import settings
from app.services.manager_stats.aggregator import (
    compute_manager_stats,
    enrich_history,
    manager_titles,
    trade_breakdown,
)
from app.services.manager_stats.awards import group_awards
from app.services.manager_stats.cache import SnapshotCache
from app.services.manager_stats.join_resolver import StandingsResolver
from app.services.manager_stats.records import calculate_league_records
from app.services.manager_stats.roster import build_roster
from app.services.manager_stats.types import (
    AwardGroup,
    Champion,
    EnrichedHistoryEntry,
    LeagueRecord,
    LeagueSnapshot,
    ManagerStats,
    RosterPage,
    RosterTab,
    TradeBreakdown,
)


class ManagerStatsService:
    def __init__(self, cache: Optional[SnapshotCache] = None) -> None:
        self.cache = cache if cache is not None else SnapshotCache(enabled=False)

    def resolver(self, snapshot: LeagueSnapshot) -> StandingsResolver:
        return self.cache.get_or_compute(
            snapshot, ("resolver",), lambda: StandingsResolver.for_snapshot(snapshot)
        )

    def get_manager_stats(self, manager_id: str, snapshot: LeagueSnapshot) -> ManagerStats:
        return self.cache.get_or_compute(
            snapshot,
            ("stats", manager_id),
            lambda: compute_manager_stats(manager_id, snapshot, self.resolver(snapshot)),
        )

    def get_grouped_awards(self, manager_id: str, snapshot: LeagueSnapshot) -> List[AwardGroup]:
        groups = self.cache.get_or_compute(
            snapshot,
            ("awards", manager_id),
            lambda: tuple(group_awards(manager_id, snapshot.awards)),
        )
        return list(groups)

    def get_enriched_history(
        self, manager_id: str, snapshot: LeagueSnapshot
    ) -> List[EnrichedHistoryEntry]:
        entries = self.cache.get_or_compute(
            snapshot,
            ("history", manager_id),
            lambda: tuple(enrich_history(manager_id, snapshot, self.resolver(snapshot))),
        )
        return list(entries)

    def get_trade_breakdown(self, manager_id: str, snapshot: LeagueSnapshot) -> TradeBreakdown:
        return self.cache.get_or_compute(
            snapshot,
            ("trades", manager_id),
            lambda: trade_breakdown(manager_id, snapshot, self.resolver(snapshot)),
        )

    def get_manager_titles(self, manager_id: str, snapshot: LeagueSnapshot) -> List[Champion]:
        titles = self.cache.get_or_compute(
            snapshot,
            ("titles", manager_id),
            lambda: tuple(manager_titles(manager_id, snapshot)),
        )
        return list(titles)

    def get_roster(
        self,
        snapshot: LeagueSnapshot,
        tab: RosterTab = RosterTab.active,
        search: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> RosterPage:
        return build_roster(
            snapshot,
            lambda manager_id: self.get_manager_stats(manager_id, snapshot),
            tab=tab,
            search=search,
            page=page,
            page_size=page_size or settings.roster_page_size,
        )

    def get_league_records(self, snapshot: LeagueSnapshot) -> List[LeagueRecord]:
        records = self.cache.get_or_compute(
            snapshot, ("records",), lambda: tuple(calculate_league_records(snapshot))
        )
        return list(records)


default_service = ManagerStatsService(SnapshotCache(enabled=settings.stats_cache_enabled))


def get_manager_stats(manager_id: str, snapshot: LeagueSnapshot) -> ManagerStats:
    return default_service.get_manager_stats(manager_id, snapshot)


def get_grouped_awards(manager_id: str, snapshot: LeagueSnapshot) -> List[AwardGroup]:
    return default_service.get_grouped_awards(manager_id, snapshot)


def get_enriched_history(manager_id: str, snapshot: LeagueSnapshot) -> List[EnrichedHistoryEntry]:
    return default_service.get_enriched_history(manager_id, snapshot)
