"""Hall-of-Fame membership."""

from typing import FrozenSet, Iterable, Optional

from app.services.manager_stats.types import HallOfFameEntry


def hall_of_fame_ids(entries: Optional[Iterable[HallOfFameEntry]]) -> FrozenSet[str]:
    """Manager ids linked to at least one Hall-of-Fame entry."""
    return frozenset(
        entry.manager_id for entry in entries or () if entry.manager_id is not None
    )


def is_hall_of_fame(
    manager_id: Optional[str], entries: Optional[Iterable[HallOfFameEntry]]
) -> bool:
    if manager_id is None:
        return False
    return manager_id in hall_of_fame_ids(entries)
