"""Group a manager's individual awards by category."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from app.services.manager_stats.types import Award, AwardGroup


def awards_for(manager_id: Optional[str], awards: Optional[Iterable[Award]]) -> List[Award]:
    if manager_id is None:
        return []
    return [award for award in awards or () if award.manager_id == manager_id]


def group_awards(manager_id: Optional[str], awards: Optional[Iterable[Award]]) -> List[AwardGroup]:
    """Group the manager's awards into ``(category, years, count)`` rows.

    Years inside a group are sorted descending (labels share the
    ``YYYY/YYYY`` shape, so string order is chronological). Groups are sorted
    by count descending; ties keep the order in which each category first
    appeared in ``awards``.

    Args:
        manager_id: Manager whose awards are grouped
        awards: Every award in the snapshot

    Returns:
        List of AwardGroup, empty when the manager has no awards
    """
    years_by_category: Dict[str, List[str]] = {}
    for award in awards_for(manager_id, awards):
        years_by_category.setdefault(award.category, []).append(award.year)

    groups = [
        AwardGroup(
            category=category,
            years=tuple(sorted(years, reverse=True)),
            count=len(years),
        )
        for category, years in years_by_category.items()
    ]
    # sorted() is stable, so equal counts stay in first-seen category order
    return sorted(groups, key=lambda group: group.count, reverse=True)


def awards_total(groups: Sequence[AwardGroup]) -> int:
    """Sum of group counts; always equals the manager's award row count."""
    return sum(group.count for group in groups)
