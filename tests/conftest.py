"""Shared fixtures: league fixture data, a fake data source and the API client."""

import os
from typing import AsyncGenerator, Dict, Iterable, Optional, Sequence, Set

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError

from app.services.manager_stats.cache import SnapshotCache
from app.services.manager_stats.service import ManagerStatsService
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

load_dotenv()


class FakeLeagueDataSource:
    """In-memory LeagueDataSource; collections named in ``failing`` raise."""

    def __init__(self, snapshot: LeagueSnapshot, failing: Optional[Set[str]] = None):
        self.snapshot = snapshot
        self.failing = failing or set()
        self.calls: Dict[str, int] = {}

    def _serve(self, collection: str, rows: Iterable) -> list:
        self.calls[collection] = self.calls.get(collection, 0) + 1
        if collection in self.failing:
            raise ConnectionError(f"{collection} unavailable")
        return list(rows)

    async def list_managers(self) -> Sequence[Manager]:
        return self._serve("managers", self.snapshot.managers)

    async def list_teams(self) -> Sequence[Team]:
        return self._serve("teams", self.snapshot.teams)

    async def list_seasons(self) -> Sequence[Season]:
        return self._serve("seasons", self.snapshot.seasons)

    async def list_season_standings(self) -> Sequence[SeasonStanding]:
        return self._serve("season_standings", self.snapshot.standings)

    async def list_manager_history(self, manager_id: Optional[str] = None) -> Sequence[ManagerHistoryEntry]:
        rows = self.snapshot.history
        if manager_id is not None:
            rows = tuple(row for row in rows if row.manager_id == manager_id)
        return self._serve("manager_history", rows)

    async def list_champions(self) -> Sequence[Champion]:
        return self._serve("champions", self.snapshot.champions)

    async def list_awards(self) -> Sequence[Award]:
        return self._serve("awards", self.snapshot.awards)

    async def list_hall_of_fame(self) -> Sequence[HallOfFameEntry]:
        return self._serve("hall_of_fame", self.snapshot.hall_of_fame)

    async def list_trades(self) -> Sequence[Trade]:
        return self._serve("trades", self.snapshot.trades)


@pytest.fixture()
def league_snapshot() -> LeagueSnapshot:
    """A small league exercising joins, misses, duplicates and awards.

    - m1 ran T1 in 2019/2020 (3 trades, 10-5) and T2 in 2020/2021 (2 trades, 8-7)
      plus one history row for 2030/2031 (no season) and one without a team.
    - m2 ran T1 in 2020/2021 (1 trade, 6-9) and is in the Hall of Fame.
    - m3 is a legend with no history at all.
    """
    return LeagueSnapshot.build(
        managers=[
            Manager(id="m1", name="Pat Riley"),
            Manager(id="m2", name="Phil Jackson", is_active=None),
            Manager(id="m3", name="Red Auerbach", is_active=False),
        ],
        teams=[
            Team(id="T1", name="Lakers", logo_url="https://img/lakers.png", manager_id="m2"),
            Team(id="T2", name="Heat", manager_id="m1"),
        ],
        seasons=[
            Season(id="S1", year="2019/2020"),
            Season(id="S2", year="2020/2021"),
        ],
        standings=[
            SeasonStanding(season_id="S1", team_id="T1", trades_count=3, wins=10, losses=5, position=1),
            SeasonStanding(season_id="S2", team_id="T2", trades_count=2, wins=8, losses=7, position=2),
            SeasonStanding(season_id="S2", team_id="T1", trades_count=1, wins=6, losses=9, position=3),
            SeasonStanding(season_id="S1", team_id="T2", trades_count=5, wins=4, losses=11, position=4),
        ],
        history=[
            ManagerHistoryEntry(id="h1", manager_id="m1", year="2019/2020", team_id="T1"),
            ManagerHistoryEntry(id="h2", manager_id="m1", year="2020/2021", team_id="T2"),
            ManagerHistoryEntry(id="h3", manager_id="m1", year="2030/2031", team_id="T1"),
            ManagerHistoryEntry(id="h4", manager_id="m1", year="2018/2019", team_id=None),
            ManagerHistoryEntry(id="h5", manager_id="m2", year="2020/2021", team_id="T1"),
        ],
        champions=[
            Champion(id="c1", year="2019/2020", team="Lakers", manager_id="m1", team_id="T1", runner_up_team_id="T2"),
            Champion(id="c2", year="2020/2021", team="Heat", manager_id="m1", team_id="T2", runner_up_team_id="T1"),
        ],
        awards=[
            Award(id="a1", manager_id="m2", category="MVP", year="2019/2020"),
            Award(id="a2", manager_id="m2", category="Defensivo", year="2020/2021"),
            Award(id="a3", manager_id="m2", category="MVP", year="2021/2022"),
            Award(id="a4", manager_id="m1", category="Gestor do Ano", year="2019/2020"),
        ],
        hall_of_fame=[HallOfFameEntry(manager_id="m2"), HallOfFameEntry(manager_id=None, name="Unlinked")],
    )


@pytest.fixture()
def stats_service() -> ManagerStatsService:
    return ManagerStatsService(SnapshotCache(enabled=True))


@pytest_asyncio.fixture()
async def app_client(
    league_snapshot: LeagueSnapshot, stats_service: ManagerStatsService
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the app reading from an in-memory data source."""
    try:
        from app.main import app
    except ValidationError as exc:  # pragma: no cover - guard for misconfigured env
        pytest.skip(f"App configuration failed: {exc}")

    from app.routes.managers import get_stats_service
    from app.services.league_data_service import get_league_data_source

    source = FakeLeagueDataSource(league_snapshot)
    app.dependency_overrides[get_league_data_source] = lambda: source
    app.dependency_overrides[get_stats_service] = lambda: stats_service
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_league_data_source, None)
        app.dependency_overrides.pop(get_stats_service, None)


def _load_database_url() -> str:
    """Resolve the database URL for tests, enforcing an explicit opt-in."""
    test_db_url = os.getenv("TEST_DATABASE_URL")
    pytest_allow_db = int(os.getenv("PYTEST_ALLOW_DB", "0"))
    if not test_db_url:
        pytest.skip("No TEST_DATABASE_URL is configured for tests.")
    if pytest_allow_db != 1:
        raise RuntimeError(
            "Running database tests requires setting PYTEST_ALLOW_DB=1 to"
            " confirm the configured database is safe to mutate."
        )
    return test_db_url  # type: ignore[return-value]


@pytest.fixture()
def database_url() -> str:
    """Return the Postgres URL the database tests should target."""
    return _load_database_url()
