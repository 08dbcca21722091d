"""Immutable record types consumed and produced by the manager stats engine.

Every collection the engine reads is held as a tuple inside a
:class:`LeagueSnapshot`; nothing in this package mutates a record after the
fetch layer builds it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional, Tuple


def as_count(value: Any) -> int:
    """Coerce a count field from the store to a non-negative int.

    Missing, non-numeric and negative values all count as 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True, slots=True)
class Manager:
    id: str
    name: str
    is_active: Optional[bool] = True  # None counts as active
    image_url: Optional[str] = None
    bio: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Team:
    id: str
    name: str
    logo_url: Optional[str] = None
    manager_id: Optional[str] = None
    is_active: Optional[bool] = True


@dataclass(frozen=True, slots=True)
class Season:
    id: Optional[str]
    year: Optional[str]


@dataclass(frozen=True, slots=True)
class SeasonStanding:
    season_id: Optional[str]
    team_id: Optional[str]
    trades_count: Optional[int] = 0
    wins: Optional[int] = 0
    losses: Optional[int] = 0
    ties: Optional[int] = 0
    position: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ManagerHistoryEntry:
    id: Optional[str]
    manager_id: Optional[str]
    year: Optional[str]
    team_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Champion:
    id: Optional[str]
    year: str
    team: str
    manager_id: Optional[str] = None
    team_id: Optional[str] = None
    runner_up_team_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Award:
    id: Optional[str]
    manager_id: Optional[str]
    category: str
    year: str


@dataclass(frozen=True, slots=True)
class HallOfFameEntry:
    manager_id: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Trade:
    id: Optional[str]
    date: Optional[datetime] = None


@dataclass(frozen=True, slots=True, eq=False)
class LeagueSnapshot:
    """All collections fetched together at one point in time.

    Equality and hashing are by identity: two fetches are two snapshots even
    when they happen to carry the same rows.
    """

    managers: Tuple[Manager, ...] = ()
    teams: Tuple[Team, ...] = ()
    seasons: Tuple[Season, ...] = ()
    standings: Tuple[SeasonStanding, ...] = ()
    history: Tuple[ManagerHistoryEntry, ...] = ()
    champions: Tuple[Champion, ...] = ()
    awards: Tuple[Award, ...] = ()
    hall_of_fame: Tuple[HallOfFameEntry, ...] = ()
    trades: Tuple[Trade, ...] = ()
    fetched_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        *,
        managers: Optional[Iterable[Manager]] = None,
        teams: Optional[Iterable[Team]] = None,
        seasons: Optional[Iterable[Season]] = None,
        standings: Optional[Iterable[SeasonStanding]] = None,
        history: Optional[Iterable[ManagerHistoryEntry]] = None,
        champions: Optional[Iterable[Champion]] = None,
        awards: Optional[Iterable[Award]] = None,
        hall_of_fame: Optional[Iterable[HallOfFameEntry]] = None,
        trades: Optional[Iterable[Trade]] = None,
        fetched_at: Optional[datetime] = None,
    ) -> "LeagueSnapshot":
        """Freeze arbitrary iterables (``None`` means empty) into a snapshot."""
        return cls(
            managers=tuple(managers or ()),
            teams=tuple(teams or ()),
            seasons=tuple(seasons or ()),
            standings=tuple(standings or ()),
            history=tuple(history or ()),
            champions=tuple(champions or ()),
            awards=tuple(awards or ()),
            hall_of_fame=tuple(hall_of_fame or ()),
            trades=tuple(trades or ()),
            fetched_at=fetched_at,
        )

    def manager(self, manager_id: Optional[str]) -> Optional[Manager]:
        for manager in self.managers:
            if manager.id == manager_id:
                return manager
        return None

    def team(self, team_id: Optional[str]) -> Optional[Team]:
        if team_id is None:
            return None
        for team in self.teams:
            if team.id == team_id:
                return team
        return None


@dataclass(frozen=True, slots=True)
class ManagerStats:
    seasons_count: int = 0
    titles: int = 0
    trades: int = 0
    wins: int = 0
    losses: int = 0
    is_hall_of_fame: bool = False

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AwardGroup:
    category: str
    years: Tuple[str, ...]
    count: int


@dataclass(frozen=True, slots=True)
class EnrichedHistoryEntry:
    """A history row with whatever the join could resolve for it."""

    entry: ManagerHistoryEntry
    standing: Optional[SeasonStanding] = None
    team: Optional[Team] = None


@dataclass(frozen=True, slots=True)
class TradeLine:
    year: str
    team_id: str
    team_name: str
    count: int
    logo_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TradeBreakdown:
    lines: Tuple[TradeLine, ...]
    total: int


class RosterTab(str, Enum):
    """Which half of the managers list is shown."""

    active = "active"
    legend = "legend"


@dataclass(frozen=True, slots=True)
class RosterCard:
    manager: Manager
    stats: ManagerStats
    current_team: Optional[Team] = None


@dataclass(frozen=True, slots=True)
class RosterPage:
    tab: RosterTab
    cards: Tuple[RosterCard, ...]
    page: int
    total_pages: int
    total: int  # managers matching tab + search, across all pages


class RecordKind(str, Enum):
    team = "TEAM"
    league = "LEAGUE"


@dataclass(frozen=True, slots=True)
class LeagueRecord:
    id: str
    title: str
    value: int
    holders: str  # every holder tied at the maximum, comma separated
    kind: RecordKind = RecordKind.team
