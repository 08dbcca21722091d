"""Print manager statistics straight from the league database.

Usage:
    python -m app.cli.manager_report                      # every manager
    python -m app.cli.manager_report --manager-id <id>    # one manager, with awards
    python -m app.cli.manager_report --records --json

Exit codes:
    0 - Success
    1 - Failure (check logs for details)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from app.config import settings
from app.logging_config import setup_logging
from app.services.league_data_service import (
    LeagueDataSource,
    SnapshotLoader,
    SqlLeagueDataSource,
)
from app.services.manager_stats.cache import SnapshotCache
from app.services.manager_stats.service import ManagerStatsService
from app.services.manager_stats.types import LeagueSnapshot

logger = logging.getLogger("manager_report")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manager statistics report")
    parser.add_argument("--manager-id", help="Only report this manager")
    parser.add_argument("--records", action="store_true", help="Include league records")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    return parser.parse_args(argv)


def build_report(
    snapshot: LeagueSnapshot,
    service: ManagerStatsService,
    manager_id: Optional[str] = None,
    include_records: bool = False,
) -> Dict[str, Any]:
    """Assemble the report payload from one snapshot."""
    if manager_id is not None:
        manager_ids = [manager_id]
    else:
        manager_ids = [manager.id for manager in snapshot.managers]

    rows: List[Dict[str, Any]] = []
    for mid in manager_ids:
        manager = snapshot.manager(mid)
        row: Dict[str, Any] = {
            "manager_id": mid,
            "name": manager.name if manager else None,
            **service.get_manager_stats(mid, snapshot).as_dict(),
        }
        if manager_id is not None:
            row["awards"] = [
                {"category": g.category, "years": list(g.years), "count": g.count}
                for g in service.get_grouped_awards(mid, snapshot)
            ]
        rows.append(row)

    report: Dict[str, Any] = {"managers": rows}
    if include_records:
        report["records"] = [
            {**asdict(record), "kind": record.kind.value}
            for record in service.get_league_records(snapshot)
        ]
    return report


def format_report(report: Dict[str, Any]) -> str:
    lines = []
    for row in report["managers"]:
        name = row["name"] or row["manager_id"]
        hof = " [HoF]" if row["is_hall_of_fame"] else ""
        lines.append(
            f"{name}{hof}: {row['seasons_count']} seasons, {row['titles']} titles, "
            f"{row['trades']} trades, {row['wins']}V - {row['losses']}D"
        )
        for group in row.get("awards", []):
            lines.append(f"  {group['count']}x {group['category']}: {', '.join(group['years'])}")
    for record in report.get("records", []):
        lines.append(f"* {record['title']}: {record['holders']} ({record['value']})")
    return "\n".join(lines)


async def run(args: argparse.Namespace, source: Optional[LeagueDataSource] = None) -> int:
    loader = SnapshotLoader(source or SqlLeagueDataSource())
    snapshot = await loader.refresh()
    if snapshot is None:
        logger.error("Snapshot fetch was superseded")
        return 1

    service = ManagerStatsService(SnapshotCache(enabled=settings.stats_cache_enabled))
    report = build_report(snapshot, service, args.manager_id, args.records)
    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        print(format_report(report))
    return 0


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(level=settings.log_level, access_log=False)
    try:
        return await run(args)
    except Exception as e:
        logger.error(f"Report failed: {e}", exc_info=True)
        return 1
    finally:
        from app.utils.db_async import dispose_engine

        await dispose_engine()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
