"""Per-manager statistics derived from one league snapshot.

Trades, wins and losses reach a manager only through that manager's own
history rows: a standing is never attributed by team alone, even if the team
shows up under another manager in a different season.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from app.services.manager_stats.hall_of_fame import is_hall_of_fame
from app.services.manager_stats.join_resolver import StandingsResolver
from app.services.manager_stats.types import (
    Champion,
    EnrichedHistoryEntry,
    LeagueSnapshot,
    ManagerHistoryEntry,
    ManagerStats,
    TradeBreakdown,
    TradeLine,
    as_count,
)

DEFAULT_TEAM_NAME = "Time"


def history_for(
    manager_id: Optional[str], snapshot: LeagueSnapshot
) -> Tuple[ManagerHistoryEntry, ...]:
    """The manager's history rows in snapshot order, duplicates included."""
    if manager_id is None:
        return ()
    return tuple(entry for entry in snapshot.history if entry.manager_id == manager_id)


def manager_titles(manager_id: Optional[str], snapshot: LeagueSnapshot) -> List[Champion]:
    if manager_id is None:
        return []
    return [champion for champion in snapshot.champions if champion.manager_id == manager_id]


def compute_manager_stats(
    manager_id: Optional[str],
    snapshot: LeagueSnapshot,
    resolver: Optional[StandingsResolver] = None,
) -> ManagerStats:
    """Compute seasons, titles, trades, record and Hall-of-Fame flag.

    History rows are not deduplicated: two rows for the same season and team
    add that standing twice. Rows without a team, or whose year has no
    season, still count as a season managed but add nothing else.

    Args:
        manager_id: Manager to aggregate
        snapshot: Collections from a single fetch
        resolver: Join resolver already built for ``snapshot``; built on
            demand when omitted

    Returns:
        ManagerStats, all zeros for an unknown manager
    """
    history = history_for(manager_id, snapshot)
    if resolver is None:
        resolver = StandingsResolver.for_snapshot(snapshot)

    trades = wins = losses = 0
    for entry in history:
        standing = resolver.resolve(entry)
        if standing is None:
            continue
        trades += as_count(standing.trades_count)
        wins += as_count(standing.wins)
        losses += as_count(standing.losses)

    return ManagerStats(
        seasons_count=len(history),
        titles=len(manager_titles(manager_id, snapshot)),
        trades=trades,
        wins=wins,
        losses=losses,
        is_hall_of_fame=is_hall_of_fame(manager_id, snapshot.hall_of_fame),
    )


def enrich_history(
    manager_id: Optional[str],
    snapshot: LeagueSnapshot,
    resolver: Optional[StandingsResolver] = None,
) -> List[EnrichedHistoryEntry]:
    """History rows, newest season first, each with its standing and team if known."""
    if resolver is None:
        resolver = StandingsResolver.for_snapshot(snapshot)

    enriched = [
        EnrichedHistoryEntry(
            entry=entry,
            standing=resolver.resolve(entry),
            team=snapshot.team(entry.team_id),
        )
        for entry in history_for(manager_id, snapshot)
    ]
    return sorted(enriched, key=lambda item: item.entry.year or "", reverse=True)


def trade_breakdown(
    manager_id: Optional[str],
    snapshot: LeagueSnapshot,
    resolver: Optional[StandingsResolver] = None,
) -> TradeBreakdown:
    """Seasons in which the manager's team made trades, newest first.

    ``total`` is the same number :func:`compute_manager_stats` reports.
    """
    if resolver is None:
        resolver = StandingsResolver.for_snapshot(snapshot)

    lines: List[TradeLine] = []
    for entry in history_for(manager_id, snapshot):
        standing = resolver.resolve(entry)
        if standing is None:
            continue
        count = as_count(standing.trades_count)
        if count <= 0:
            continue
        team = snapshot.team(entry.team_id)
        lines.append(
            TradeLine(
                year=entry.year or "",
                team_id=entry.team_id or "",
                team_name=team.name if team else DEFAULT_TEAM_NAME,
                count=count,
                logo_url=team.logo_url if team else None,
            )
        )

    lines.sort(key=lambda line: line.year, reverse=True)
    return TradeBreakdown(lines=tuple(lines), total=sum(line.count for line in lines))
