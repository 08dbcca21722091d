"""Resolve a (year label, team id) pair to its season standing."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, NamedTuple, Optional, Protocol

from app.services.manager_stats.season_index import SeasonIndex, build_season_index
from app.services.manager_stats.types import LeagueSnapshot, SeasonStanding

logger = logging.getLogger(__name__)


class StandingKey(NamedTuple):
    season_id: str
    team_id: str


class SeasonTeamRef(Protocol):
    """Anything carrying a year label and an optional team id."""

    @property
    def year(self) -> Optional[str]: ...

    @property
    def team_id(self) -> Optional[str]: ...


class StandingsResolver:
    """Composite-key lookup over one snapshot's standings.

    The lookup is built once. Rows sharing a key overwrite each other in input
    order, the same last-seen-wins rule the season index applies to labels.
    """

    def __init__(
        self, index: SeasonIndex, standings: Optional[Iterable[SeasonStanding]]
    ) -> None:
        self.index = index
        self._by_key: Dict[StandingKey, SeasonStanding] = {}
        self._occurrences: Dict[StandingKey, int] = {}

        for standing in standings or ():
            if standing.season_id is None or standing.team_id is None:
                continue
            key = StandingKey(standing.season_id, standing.team_id)
            self._by_key[key] = standing
            self._occurrences[key] = self._occurrences.get(key, 0) + 1

        duplicates = self.duplicate_keys
        if duplicates:
            logger.warning(
                f"{len(duplicates)} season/team pairs have several standings; "
                "the last row of each wins"
            )

    @classmethod
    def for_snapshot(cls, snapshot: LeagueSnapshot) -> "StandingsResolver":
        return cls(build_season_index(snapshot.seasons), snapshot.standings)

    @property
    def duplicate_keys(self) -> Mapping[StandingKey, int]:
        """Keys seen more than once, with how many rows claimed each."""
        return MappingProxyType(
            {key: count for key, count in self._occurrences.items() if count > 1}
        )

    def key_for(self, year: Optional[str], team_id: Optional[str]) -> Optional[StandingKey]:
        if team_id is None:
            return None
        season_id = self.index.season_id(year)
        if season_id is None:
            return None
        return StandingKey(season_id, team_id)

    def resolve(self, entry: SeasonTeamRef) -> Optional[SeasonStanding]:
        """Return the standing for ``entry`` or ``None`` when nothing matches."""
        key = self.key_for(entry.year, entry.team_id)
        if key is None:
            return None
        return self._by_key.get(key)


def resolve_standing(
    entry: SeasonTeamRef,
    index: SeasonIndex,
    standings: Optional[Iterable[SeasonStanding]],
) -> Optional[SeasonStanding]:
    """One-shot resolution; prefer a shared :class:`StandingsResolver` in loops."""
    return StandingsResolver(index, standings).resolve(entry)
