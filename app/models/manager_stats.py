"""Response models for the manager statistics API."""

from typing import List, Optional

from pydantic import computed_field
from sqlmodel import SQLModel

from app.services.manager_stats import types


class ManagerStatsRead(SQLModel):
    """Aggregated statistics shown on every manager surface."""

    seasons_count: int = 0
    titles: int = 0
    trades: int = 0
    wins: int = 0
    losses: int = 0
    is_hall_of_fame: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def record_display(self) -> str:
        """Win/loss record as 'WV - LD', the league's display format."""
        return f"{self.wins}V - {self.losses}D"

    @classmethod
    def from_stats(cls, stats: types.ManagerStats) -> "ManagerStatsRead":
        return cls(**stats.as_dict())


class ManagerRead(SQLModel):
    id: str
    name: str
    is_active: bool = True
    image_url: Optional[str] = None
    bio: Optional[str] = None

    @classmethod
    def from_manager(cls, manager: types.Manager) -> "ManagerRead":
        return cls(
            id=manager.id,
            name=manager.name,
            is_active=manager.is_active is not False,
            image_url=manager.image_url,
            bio=manager.bio,
        )


class TeamRead(SQLModel):
    id: str
    name: str
    logo_url: Optional[str] = None


class ManagerStatsResponse(SQLModel):
    manager_id: str
    manager: Optional[ManagerRead] = None
    stats: ManagerStatsRead


class StandingRead(SQLModel):
    trades_count: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    position: Optional[int] = None


class SeasonEntryRead(SQLModel):
    id: Optional[str] = None
    year: Optional[str] = None
    team_id: Optional[str] = None
    team: Optional[TeamRead] = None
    standing: Optional[StandingRead] = None

    @computed_field  # type: ignore[misc]
    @property
    def short_year(self) -> Optional[str]:
        """'2019/2020' -> '19/20'."""
        if not self.year or "/" not in self.year:
            return self.year
        start, end = self.year.split("/", 1)
        return f"{start[2:]}/{end[2:]}"


class ManagerSeasonsResponse(SQLModel):
    manager_id: str
    seasons: List[SeasonEntryRead]


class TitleRead(SQLModel):
    id: Optional[str] = None
    year: str
    team: str


class ManagerTitlesResponse(SQLModel):
    manager_id: str
    titles: List[TitleRead]
    total: int


class TradeLineRead(SQLModel):
    year: str
    team_id: str
    team_name: str
    count: int
    logo_url: Optional[str] = None


class ManagerTradesResponse(SQLModel):
    manager_id: str
    lines: List[TradeLineRead]
    total: int


class AwardGroupRead(SQLModel):
    category: str
    years: List[str]
    count: int

    @computed_field  # type: ignore[misc]
    @property
    def label(self) -> str:
        """'2x MVP' for repeat winners, plain category otherwise."""
        return f"{self.count}x {self.category}" if self.count > 1 else self.category


class ManagerAwardsResponse(SQLModel):
    manager_id: str
    groups: List[AwardGroupRead]
    total: int


class RosterCardRead(SQLModel):
    manager: ManagerRead
    current_team: Optional[TeamRead] = None
    stats: ManagerStatsRead


class RosterResponse(SQLModel):
    tab: types.RosterTab
    page: int
    total_pages: int
    total: int
    cards: List[RosterCardRead]


class LeagueRecordRead(SQLModel):
    id: str
    title: str
    value: int
    holders: str
    kind: types.RecordKind


class LeagueRecordsResponse(SQLModel):
    records: List[LeagueRecordRead]
