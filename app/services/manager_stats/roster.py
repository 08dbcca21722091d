"""Managers list: tab filter, name search, pagination and per-card stats."""

from __future__ import annotations

import math
from typing import Callable, List, Optional

from app.services.manager_stats.types import (
    LeagueSnapshot,
    Manager,
    ManagerStats,
    RosterCard,
    RosterPage,
    RosterTab,
    Team,
)

ITEMS_PER_PAGE = 10


def matches_tab(manager: Manager, tab: RosterTab) -> bool:
    # Managers with no explicit flag are listed as active
    if tab == RosterTab.active:
        return manager.is_active is not False
    return manager.is_active is False


def current_team(manager: Manager, snapshot: LeagueSnapshot) -> Optional[Team]:
    for team in snapshot.teams:
        if team.manager_id == manager.id and team.is_active is not False:
            return team
    return None


def filter_managers(
    snapshot: LeagueSnapshot, tab: RosterTab, search: Optional[str] = None
) -> List[Manager]:
    needle = (search or "").strip().lower()
    selected = [
        manager
        for manager in snapshot.managers
        if matches_tab(manager, tab) and needle in (manager.name or "").lower()
    ]
    return sorted(
        selected,
        key=lambda manager: ((manager.name or "").lower(), manager.name or "", manager.id),
    )


def build_roster(
    snapshot: LeagueSnapshot,
    stats_for: Callable[[str], ManagerStats],
    tab: RosterTab = RosterTab.active,
    search: Optional[str] = None,
    page: int = 1,
    page_size: int = ITEMS_PER_PAGE,
) -> RosterPage:
    """Project one page of the managers list.

    Args:
        snapshot: Collections from a single fetch
        stats_for: Stats lookup by manager id; pass the service's
            ``get_manager_stats`` so cards match the detail view exactly
        tab: Active managers or legends
        search: Case-insensitive substring of the manager name
        page: 1-based page number, clamped into the available range
        page_size: Cards per page

    Returns:
        RosterPage with the cards of the requested page
    """
    page_size = max(int(page_size), 1)
    managers = filter_managers(snapshot, tab, search)
    total_pages = math.ceil(len(managers) / page_size)
    page = min(max(int(page), 1), max(total_pages, 1))

    start = (page - 1) * page_size
    cards = tuple(
        RosterCard(
            manager=manager,
            stats=stats_for(manager.id),
            current_team=current_team(manager, snapshot),
        )
        for manager in managers[start : start + page_size]
    )
    return RosterPage(
        tab=tab,
        cards=cards,
        page=page,
        total_pages=total_pages,
        total=len(managers),
    )
