"""League-wide records computed automatically from standings, champions and trades."""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from app.services.manager_stats.types import (
    LeagueRecord,
    LeagueSnapshot,
    RecordKind,
    SeasonStanding,
    as_count,
)

T = TypeVar("T")

UNKNOWN_NAME = "Desconhecido"
UNKNOWN_SEASON = "Unknown"


def find_max_and_holders(
    items: Iterable[T],
    get_value: Callable[[T], int],
    get_label: Callable[[T], str],
    min_threshold: int = 0,
) -> Optional[Tuple[int, str]]:
    """Return ``(max value, holders)`` or ``None`` if the max is not above the threshold.

    Every item tied at the maximum is a holder; labels keep input order and
    are joined with ``", "``.
    """
    items = list(items)
    if not items:
        return None
    max_value = max(get_value(item) for item in items)
    if max_value <= min_threshold:
        return None
    holders = [get_label(item) for item in items if get_value(item) == max_value]
    return max_value, ", ".join(holders)


def _team_name(snapshot: LeagueSnapshot, team_id: Optional[str]) -> str:
    team = snapshot.team(team_id)
    return team.name if team else UNKNOWN_NAME


def _trade_day(value: date) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def _most_trades_in_a_day(snapshot: LeagueSnapshot) -> Optional[LeagueRecord]:
    by_day: Counter[str] = Counter(
        _trade_day(trade.date) for trade in snapshot.trades if trade.date is not None
    )
    best = find_max_and_holders(by_day.items(), lambda kv: kv[1], lambda kv: kv[0])
    if best is None:
        return None
    return LeagueRecord(
        id="most-trades-day",
        title="Mais Trades em um Dia",
        value=best[0],
        holders=best[1],
        kind=RecordKind.league,
    )


def _season_with_most_trades(
    snapshot: LeagueSnapshot, year_by_season: Dict[str, str]
) -> Optional[LeagueRecord]:
    totals: Dict[str, int] = {}
    for standing in snapshot.standings:
        year = year_by_season.get(standing.season_id or "", UNKNOWN_SEASON)
        totals[year] = totals.get(year, 0) + as_count(standing.trades_count)
    # Each trade is booked on both teams' standings
    halved = {year: total // 2 for year, total in totals.items()}

    best = find_max_and_holders(halved.items(), lambda kv: kv[1], lambda kv: kv[0])
    if best is None:
        return None
    return LeagueRecord(
        id="most-trades-season-league",
        title="Temporada com Mais Trades",
        value=best[0],
        holders=best[1],
        kind=RecordKind.league,
    )


def _single_season_record(
    snapshot: LeagueSnapshot,
    year_by_season: Dict[str, str],
    record_id: str,
    title: str,
    get_value: Callable[[SeasonStanding], int],
) -> Optional[LeagueRecord]:
    best = find_max_and_holders(
        snapshot.standings,
        get_value,
        lambda st: f"{_team_name(snapshot, st.team_id)} ({year_by_season.get(st.season_id or '', UNKNOWN_SEASON)})",
    )
    if best is None:
        return None
    return LeagueRecord(id=record_id, title=title, value=best[0], holders=best[1])


def _team_total_record(
    snapshot: LeagueSnapshot,
    totals: Dict[str, int],
    record_id: str,
    title: str,
) -> Optional[LeagueRecord]:
    best = find_max_and_holders(
        totals.items(), lambda kv: kv[1], lambda kv: _team_name(snapshot, kv[0])
    )
    if best is None:
        return None
    return LeagueRecord(id=record_id, title=title, value=best[0], holders=best[1])


def calculate_league_records(snapshot: LeagueSnapshot) -> List[LeagueRecord]:
    """Compute every automatic record the snapshot supports.

    Records whose best value is 0 are left out, so an empty league yields an
    empty list.
    """
    year_by_season = {
        season.id: season.year
        for season in snapshot.seasons
        if season.id is not None and season.year
    }

    wins_by_team: Dict[str, int] = {}
    losses_by_team: Dict[str, int] = {}
    first_places: Dict[str, int] = {}
    for standing in snapshot.standings:
        if standing.team_id is None:
            continue
        wins_by_team[standing.team_id] = wins_by_team.get(standing.team_id, 0) + as_count(standing.wins)
        losses_by_team[standing.team_id] = losses_by_team.get(standing.team_id, 0) + as_count(standing.losses)
        if standing.position == 1:
            first_places[standing.team_id] = first_places.get(standing.team_id, 0) + 1

    titles_by_team: Dict[str, int] = {}
    runner_ups_by_team: Dict[str, int] = {}
    for champion in snapshot.champions:
        if champion.team_id:
            titles_by_team[champion.team_id] = titles_by_team.get(champion.team_id, 0) + 1
        if champion.runner_up_team_id:
            runner_ups_by_team[champion.runner_up_team_id] = (
                runner_ups_by_team.get(champion.runner_up_team_id, 0) + 1
            )

    candidates = [
        _most_trades_in_a_day(snapshot),
        _season_with_most_trades(snapshot, year_by_season),
        _single_season_record(
            snapshot,
            year_by_season,
            "most-wins-season-team",
            "Time com Mais Vitórias (Season)",
            lambda st: as_count(st.wins),
        ),
        _single_season_record(
            snapshot,
            year_by_season,
            "most-losses-season-team",
            "Time com Mais Derrotas (Season)",
            lambda st: as_count(st.losses),
        ),
        _team_total_record(snapshot, wins_by_team, "most-wins-total-team", "Time Mais Vitorioso (Geral)"),
        _team_total_record(snapshot, losses_by_team, "most-losses-total-team", "Time com Mais Derrotas (Geral)"),
        _team_total_record(snapshot, titles_by_team, "most-titles-team", "Time com Mais Títulos"),
        _team_total_record(snapshot, runner_ups_by_team, "most-runners-team", "Time com Mais Vice-Campeonatos"),
        _team_total_record(snapshot, first_places, "most-reg-season-team", "Time Campeão Regular Season"),
    ]
    return [record for record in candidates if record is not None]
