"""Read-only access to the league tables and snapshot assembly.

Each collection is read in its own session so a snapshot's fetches can run
concurrently. A collection that fails to load is logged and treated as empty;
the stats engine only ever sees complete (possibly empty) collections.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Optional, Protocol, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.schemas.awards import Award as AwardRow
from app.schemas.champions import Champion as ChampionRow
from app.schemas.hall_of_fame import HallOfFame as HallOfFameRow
from app.schemas.manager_history import ManagerHistory as ManagerHistoryRow
from app.schemas.managers import Manager as ManagerRow
from app.schemas.season_standings import SeasonStanding as SeasonStandingRow
from app.schemas.seasons import Season as SeasonRow
from app.schemas.teams import Team as TeamRow
from app.schemas.trades import Trade as TradeRow
from app.services.manager_stats.errors import DataFetchError
from app.services.manager_stats.types import (
    Award,
    Champion,
    HallOfFameEntry,
    LeagueSnapshot,
    Manager,
    ManagerHistoryEntry,
    Season,
    SeasonStanding,
    Team,
    Trade,
)
from app.utils.request_generation import LatestResult

logger = logging.getLogger(__name__)


class LeagueDataSource(Protocol):
    async def list_managers(self) -> Sequence[Manager]: ...

    async def list_teams(self) -> Sequence[Team]: ...

    async def list_seasons(self) -> Sequence[Season]: ...

    async def list_season_standings(self) -> Sequence[SeasonStanding]: ...

    async def list_manager_history(
        self, manager_id: Optional[str] = None
    ) -> Sequence[ManagerHistoryEntry]: ...

    async def list_champions(self) -> Sequence[Champion]: ...

    async def list_awards(self) -> Sequence[Award]: ...

    async def list_hall_of_fame(self) -> Sequence[HallOfFameEntry]: ...

    async def list_trades(self) -> Sequence[Trade]: ...


class SqlLeagueDataSource:
    """LeagueDataSource backed by the async SQLAlchemy engine."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        if session_factory is None:
            from app.utils.db_async import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory

    async def _fetch_all(self, collection: str, stmt: Any) -> List[Any]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            raise DataFetchError(collection, exc) from exc

    async def list_managers(self) -> List[Manager]:
        rows = await self._fetch_all(
            "managers", select(ManagerRow).order_by(ManagerRow.created_at, ManagerRow.id)  # type: ignore[arg-type]
        )
        return [
            Manager(
                id=row.id,
                name=row.name,
                is_active=row.is_active,
                image_url=row.image_url,
                bio=row.bio,
            )
            for row in rows
        ]

    async def list_teams(self) -> List[Team]:
        rows = await self._fetch_all("teams", select(TeamRow).order_by(TeamRow.name, TeamRow.id))  # type: ignore[arg-type]
        return [
            Team(
                id=row.id,
                name=row.name,
                logo_url=row.logo_url,
                manager_id=row.manager_id,
                is_active=row.is_active,
            )
            for row in rows
        ]

    async def list_seasons(self) -> List[Season]:
        rows = await self._fetch_all("seasons", select(SeasonRow).order_by(SeasonRow.id))  # type: ignore[arg-type]
        return [Season(id=row.id, year=row.year) for row in rows]

    async def list_season_standings(self) -> List[SeasonStanding]:
        rows = await self._fetch_all(
            "season_standings", select(SeasonStandingRow).order_by(SeasonStandingRow.id)  # type: ignore[arg-type]
        )
        return [
            SeasonStanding(
                season_id=row.season_id,
                team_id=row.team_id,
                trades_count=row.trades_count,
                wins=row.wins,
                losses=row.losses,
                ties=row.ties,
                position=row.position,
            )
            for row in rows
        ]

    async def list_manager_history(
        self, manager_id: Optional[str] = None
    ) -> List[ManagerHistoryEntry]:
        stmt = select(ManagerHistoryRow)
        if manager_id is not None:
            stmt = stmt.where(ManagerHistoryRow.manager_id == manager_id)  # type: ignore[arg-type]
        stmt = stmt.order_by(ManagerHistoryRow.year.desc(), ManagerHistoryRow.id)  # type: ignore[attr-defined]
        rows = await self._fetch_all("manager_history", stmt)
        return [
            ManagerHistoryEntry(
                id=row.id, manager_id=row.manager_id, year=row.year, team_id=row.team_id
            )
            for row in rows
        ]

    async def list_champions(self) -> List[Champion]:
        rows = await self._fetch_all(
            "champions", select(ChampionRow).order_by(ChampionRow.year.desc(), ChampionRow.id)  # type: ignore[attr-defined]
        )
        return [
            Champion(
                id=row.id,
                year=row.year,
                team=row.team,
                manager_id=row.manager_id,
                team_id=row.team_id,
                runner_up_team_id=row.runner_up_team_id,
            )
            for row in rows
        ]

    async def list_awards(self) -> List[Award]:
        rows = await self._fetch_all("awards", select(AwardRow).order_by(AwardRow.id))  # type: ignore[arg-type]
        return [
            Award(id=row.id, manager_id=row.manager_id, category=row.category, year=row.year)
            for row in rows
        ]

    async def list_hall_of_fame(self) -> List[HallOfFameEntry]:
        rows = await self._fetch_all("hall_of_fame", select(HallOfFameRow).order_by(HallOfFameRow.id))  # type: ignore[arg-type]
        return [HallOfFameEntry(manager_id=row.manager_id, id=row.id, name=row.name) for row in rows]

    async def list_trades(self) -> List[Trade]:
        rows = await self._fetch_all("trades", select(TradeRow).order_by(TradeRow.date, TradeRow.id))  # type: ignore[arg-type]
        return [Trade(id=row.id, date=row.date) for row in rows]


async def _fetch_or_empty(collection: str, fetch: Callable[[], Awaitable[Sequence[Any]]]) -> List[Any]:
    try:
        return list(await fetch())
    except DataFetchError as exc:
        error = exc
    except Exception as exc:
        error = DataFetchError(collection, exc)
    logger.warning(f"{error}; treating {collection} as empty")
    return []


async def fetch_snapshot(source: LeagueDataSource) -> LeagueSnapshot:
    """Fetch every collection concurrently and freeze them into one snapshot.

    Args:
        source: Data source to read from

    Returns:
        LeagueSnapshot; collections that failed to load are empty
    """
    (
        managers,
        teams,
        seasons,
        standings,
        history,
        champions,
        awards,
        hall_of_fame,
        trades,
    ) = await asyncio.gather(
        _fetch_or_empty("managers", source.list_managers),
        _fetch_or_empty("teams", source.list_teams),
        _fetch_or_empty("seasons", source.list_seasons),
        _fetch_or_empty("season_standings", source.list_season_standings),
        _fetch_or_empty("manager_history", source.list_manager_history),
        _fetch_or_empty("champions", source.list_champions),
        _fetch_or_empty("awards", source.list_awards),
        _fetch_or_empty("hall_of_fame", source.list_hall_of_fame),
        _fetch_or_empty("trades", source.list_trades),
    )
    return LeagueSnapshot.build(
        managers=managers,
        teams=teams,
        seasons=seasons,
        standings=standings,
        history=history,
        champions=champions,
        awards=awards,
        hall_of_fame=hall_of_fame,
        trades=trades,
        fetched_at=datetime.now(timezone.utc),
    )


class SnapshotLoader:
    """Snapshot holder for one consuming view.

    Overlapping refreshes resolve to the latest one; :meth:`close` (the view
    went away) discards anything still in flight.
    """

    def __init__(self, source: LeagueDataSource) -> None:
        self.source = source
        self._latest: LatestResult[LeagueSnapshot] = LatestResult()

    @property
    def snapshot(self) -> Optional[LeagueSnapshot]:
        return self._latest.value

    async def refresh(self) -> Optional[LeagueSnapshot]:
        """Fetch a new snapshot; ``None`` if a newer refresh or close() superseded it."""
        applied, snapshot = await self._latest.run(lambda: fetch_snapshot(self.source))
        return snapshot if applied else None

    def close(self) -> None:
        self._latest.cancel()


def get_league_data_source() -> LeagueDataSource:
    """FastAPI dependency returning the database-backed source."""
    return SqlLeagueDataSource()
