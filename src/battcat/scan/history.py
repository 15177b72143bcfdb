"""Persisted history of announcement scans.

The newest recorded run date is the next run's publication cutoff.
"""

from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config.rules import DEFAULT_LOOKBACK_DAYS
from ..config.settings import HISTORY_FILE
from ..utils.logging import get_logger

logger = get_logger(__name__)


def load_runs(path: Path = HISTORY_FILE) -> List[Dict[str, Any]]:
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        logger.warning("Ignoring unreadable run history %s: %s", path.name, exc)
        return []
    runs = data.get("runs", []) if isinstance(data, dict) else []
    return [r for r in runs if isinstance(r, dict) and r.get("date")]


def last_run_date(path: Path = HISTORY_FILE) -> Optional[date]:
    dates = []
    for run in load_runs(path):
        try:
            dates.append(date.fromisoformat(str(run["date"])))
        except ValueError:
            logger.warning("Ignoring run with bad date in %s: %r", path.name, run["date"])
    return max(dates) if dates else None


def get_cutoff(path: Path = HISTORY_FILE, now: Optional[datetime] = None) -> datetime:
    """Midnight UTC of the last run date, or ``now`` minus the default look-back."""
    last = last_run_date(path)
    if last is not None:
        logger.info("Cutoff: %s (from last run)", last.isoformat())
        return datetime.combine(last, time.min, tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=DEFAULT_LOOKBACK_DAYS)
    logger.info(
        "Cutoff: %s (first run, defaulting to %d days ago)",
        cutoff.date().isoformat(),
        DEFAULT_LOOKBACK_DAYS,
    )
    return cutoff


def record_run(
    run_date: date,
    report_name: str,
    articles: int,
    announced: int,
    confirmed: int,
    path: Path = HISTORY_FILE,
) -> None:
    runs = load_runs(path)
    runs = [r for r in runs if r.get("date") != run_date.isoformat()]
    runs.append(
        {
            "date": run_date.isoformat(),
            "report": report_name,
            "articles": articles,
            "announced": announced,
            "confirmed": confirmed,
        }
    )
    runs.sort(key=lambda r: r["date"])
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"runs": runs}, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
