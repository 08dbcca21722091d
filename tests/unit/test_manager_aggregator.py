"""Unit tests for per-manager aggregation."""

from app.services.manager_stats.aggregator import (
    compute_manager_stats,
    enrich_history,
    history_for,
    manager_titles,
    trade_breakdown,
)
from app.services.manager_stats.types import (
    Champion,
    HallOfFameEntry,
    LeagueSnapshot,
    ManagerHistoryEntry,
    ManagerStats,
    Season,
    SeasonStanding,
    Team,
)


def _single_season_snapshot(**overrides) -> LeagueSnapshot:
    data = dict(
        seasons=[Season(id="S1", year="2019/2020")],
        standings=[SeasonStanding(season_id="S1", team_id="T1", trades_count=3, wins=10, losses=5)],
        history=[ManagerHistoryEntry(id="h1", manager_id="M1", year="2019/2020", team_id="T1")],
    )
    data.update(overrides)
    return LeagueSnapshot.build(**data)


class TestComputeManagerStats:
    """Tests for compute_manager_stats()."""

    def test_single_resolved_season(self) -> None:
        """One history row joined to one standing."""
        stats = compute_manager_stats("M1", _single_season_snapshot())
        assert stats == ManagerStats(
            seasons_count=1, titles=0, trades=3, wins=10, losses=5, is_hall_of_fame=False
        )

    def test_manager_without_history_is_all_zero(self) -> None:
        assert compute_manager_stats("nobody", _single_season_snapshot()) == ManagerStats()

    def test_empty_snapshot(self) -> None:
        assert compute_manager_stats("M1", LeagueSnapshot()) == ManagerStats()

    def test_none_manager_id_is_all_zero(self) -> None:
        """History rows with no manager are never attributed to anyone."""
        snapshot = _single_season_snapshot(
            history=[ManagerHistoryEntry(id="h1", manager_id=None, year="2019/2020", team_id="T1")]
        )
        assert compute_manager_stats(None, snapshot) == ManagerStats()

    def test_hall_of_fame_without_history(self) -> None:
        """Hall-of-Fame membership does not need any history."""
        snapshot = LeagueSnapshot.build(hall_of_fame=[HallOfFameEntry(manager_id="M9")])
        assert compute_manager_stats("M9", snapshot) == ManagerStats(is_hall_of_fame=True)

    def test_unknown_year_only_counts_as_season(self) -> None:
        """A row whose year has no season adds a season but no trades or record."""
        snapshot = _single_season_snapshot(
            history=[
                ManagerHistoryEntry(id="h1", manager_id="M1", year="2019/2020", team_id="T1"),
                ManagerHistoryEntry(id="h2", manager_id="M1", year="2030/2031", team_id="T1"),
            ]
        )
        stats = compute_manager_stats("M1", snapshot)
        assert stats.seasons_count == 2
        assert (stats.trades, stats.wins, stats.losses) == (3, 10, 5)

    def test_row_without_team_only_counts_as_season(self) -> None:
        snapshot = _single_season_snapshot(
            history=[ManagerHistoryEntry(id="h1", manager_id="M1", year="2019/2020", team_id=None)]
        )
        assert compute_manager_stats("M1", snapshot) == ManagerStats(seasons_count=1)

    def test_duplicate_history_rows_double_count(self) -> None:
        """Regression: two rows for the same season/team add the standing twice.

        Upstream data may hold such duplicates; the totals have always
        counted them twice and still do.
        """
        entry = ManagerHistoryEntry(id="h1", manager_id="M1", year="2019/2020", team_id="T1")
        copy = ManagerHistoryEntry(id="h1b", manager_id="M1", year="2019/2020", team_id="T1")
        stats = compute_manager_stats("M1", _single_season_snapshot(history=[entry, copy]))
        assert stats == ManagerStats(seasons_count=2, trades=6, wins=20, losses=10)

    def test_standings_not_attributed_by_team_alone(self) -> None:
        """Another manager's season with the same team does not leak in."""
        snapshot = LeagueSnapshot.build(
            seasons=[Season(id="S1", year="2019/2020"), Season(id="S2", year="2020/2021")],
            standings=[
                SeasonStanding(season_id="S1", team_id="T1", trades_count=3, wins=10, losses=5),
                SeasonStanding(season_id="S2", team_id="T1", trades_count=7, wins=1, losses=14),
            ],
            history=[
                ManagerHistoryEntry(id="h1", manager_id="M1", year="2019/2020", team_id="T1"),
                ManagerHistoryEntry(id="h2", manager_id="M2", year="2020/2021", team_id="T1"),
            ],
        )
        assert compute_manager_stats("M1", snapshot).trades == 3
        assert compute_manager_stats("M2", snapshot).trades == 7

    def test_missing_numeric_fields_count_as_zero(self) -> None:
        snapshot = _single_season_snapshot(
            standings=[SeasonStanding(season_id="S1", team_id="T1", trades_count=None, wins=None, losses=4)]
        )
        stats = compute_manager_stats("M1", snapshot)
        assert (stats.trades, stats.wins, stats.losses) == (0, 0, 4)

    def test_titles_count_champion_rows(self) -> None:
        snapshot = _single_season_snapshot(
            champions=[
                Champion(id="c1", year="2019/2020", team="Lakers", manager_id="M1"),
                Champion(id="c2", year="2020/2021", team="Lakers", manager_id="M1"),
                Champion(id="c3", year="2021/2022", team="Heat", manager_id="M2"),
                Champion(id="c4", year="2022/2023", team="Heat", manager_id=None),
            ]
        )
        assert compute_manager_stats("M1", snapshot).titles == 2

    def test_fixture_totals(self, league_snapshot) -> None:
        """Totals match a manual sum over the shared fixture."""
        assert compute_manager_stats("m1", league_snapshot) == ManagerStats(
            seasons_count=4, titles=2, trades=5, wins=18, losses=12, is_hall_of_fame=False
        )
        assert compute_manager_stats("m2", league_snapshot) == ManagerStats(
            seasons_count=1, titles=0, trades=1, wins=6, losses=9, is_hall_of_fame=True
        )
        assert compute_manager_stats("m3", league_snapshot) == ManagerStats()

    def test_same_snapshot_gives_identical_results(self, league_snapshot) -> None:
        first = compute_manager_stats("m1", league_snapshot)
        second = compute_manager_stats("m1", league_snapshot)
        assert first == second
        assert repr(first) == repr(second)


class TestEnrichHistory:
    """Tests for enrich_history()."""

    def test_newest_first_with_resolved_standings(self, league_snapshot) -> None:
        entries = enrich_history("m1", league_snapshot)

        assert [item.entry.year for item in entries] == [
            "2030/2031",
            "2020/2021",
            "2019/2020",
            "2018/2019",
        ]
        assert entries[0].standing is None
        assert entries[1].standing is not None and entries[1].standing.trades_count == 2
        assert entries[2].team is not None and entries[2].team.name == "Lakers"
        assert entries[3].team is None

    def test_unknown_manager(self, league_snapshot) -> None:
        assert enrich_history("ghost", league_snapshot) == []


class TestTradeBreakdown:
    """Tests for trade_breakdown()."""

    def test_lines_and_total(self, league_snapshot) -> None:
        breakdown = trade_breakdown("m1", league_snapshot)

        assert [(line.year, line.team_name, line.count) for line in breakdown.lines] == [
            ("2020/2021", "Heat", 2),
            ("2019/2020", "Lakers", 3),
        ]
        assert breakdown.total == compute_manager_stats("m1", league_snapshot).trades

    def test_seasons_without_trades_are_left_out(self) -> None:
        snapshot = _single_season_snapshot(
            standings=[SeasonStanding(season_id="S1", team_id="T1", trades_count=0, wins=3)]
        )
        breakdown = trade_breakdown("M1", snapshot)
        assert breakdown.lines == ()
        assert breakdown.total == 0

    def test_unknown_team_uses_default_name(self) -> None:
        breakdown = trade_breakdown("M1", _single_season_snapshot())
        assert breakdown.lines[0].team_name == "Time"
        assert breakdown.lines[0].logo_url is None

    def test_team_logo_is_carried(self) -> None:
        snapshot = _single_season_snapshot(teams=[Team(id="T1", name="Lakers", logo_url="l.png")])
        assert trade_breakdown("M1", snapshot).lines[0].logo_url == "l.png"


class TestHistoryAndTitles:
    """Tests for history_for() and manager_titles()."""

    def test_history_keeps_snapshot_order(self, league_snapshot) -> None:
        assert [entry.id for entry in history_for("m1", league_snapshot)] == ["h1", "h2", "h3", "h4"]

    def test_titles(self, league_snapshot) -> None:
        assert [title.id for title in manager_titles("m1", league_snapshot)] == ["c1", "c2"]
        assert manager_titles("m2", league_snapshot) == []
