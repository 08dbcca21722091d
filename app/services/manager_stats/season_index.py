"""Year label -> season id lookup."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from app.services.manager_stats.types import Season

logger = logging.getLogger(__name__)


class SeasonIndex(Mapping[str, str]):
    """Read-only mapping from a season's year label to its id.

    When several seasons share a label the one seen last wins; every id seen
    for such a label is kept in :attr:`collisions` so callers can inspect the
    conflict instead of losing it.
    """

    __slots__ = ("_ids", "_collisions")

    def __init__(
        self,
        ids: Optional[Dict[str, str]] = None,
        collisions: Optional[Dict[str, Tuple[str, ...]]] = None,
    ) -> None:
        self._ids: Dict[str, str] = dict(ids or {})
        self._collisions: Dict[str, Tuple[str, ...]] = dict(collisions or {})

    def __getitem__(self, year: str) -> str:
        return self._ids[year]

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"SeasonIndex({self._ids!r}, collisions={self._collisions!r})"

    @property
    def collisions(self) -> Mapping[str, Tuple[str, ...]]:
        """Year labels claimed by more than one season id, ids in input order."""
        return MappingProxyType(self._collisions)

    @property
    def has_collisions(self) -> bool:
        return bool(self._collisions)

    def season_id(self, year: Optional[str]) -> Optional[str]:
        if year is None:
            return None
        return self._ids.get(year)


def build_season_index(seasons: Optional[Iterable[Season]]) -> SeasonIndex:
    """Build the year -> season id index.

    Args:
        seasons: Seasons in any order. ``None`` or rows lacking an id or a
            year are skipped.

    Returns:
        SeasonIndex with last-seen-wins resolution for duplicated labels
    """
    ids: Dict[str, str] = {}
    seen: Dict[str, List[str]] = {}

    for season in seasons or ():
        year = getattr(season, "year", None)
        season_id = getattr(season, "id", None)
        if not year or season_id is None:
            continue
        claimed = seen.setdefault(year, [])
        if season_id not in claimed:
            claimed.append(season_id)
        ids[year] = season_id

    collisions = {year: tuple(claimed) for year, claimed in seen.items() if len(claimed) > 1}
    if collisions:
        logger.warning(
            f"Season year labels shared by several seasons (last one wins): {collisions}"
        )

    return SeasonIndex(ids, collisions)
