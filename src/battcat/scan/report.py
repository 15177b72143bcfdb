"""Markdown report for one announcement scan."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Sequence

from ..config.settings import REPORTS_DIR
from .models import ConfirmedNewBattery


def report_path(run_date: date, reports_dir: Path = REPORTS_DIR) -> Path:
    return reports_dir / f"new-batteries-{run_date.isoformat()}.md"


def _header(run_date: date) -> str:
    return f"# New Batteries to Review — {run_date.isoformat()}\n\n"


def render_nothing_relevant(run_date: date, cutoff: date) -> str:
    return _header(run_date) + f"Nothing relevant found since {cutoff.isoformat()}.\n"


def render_no_announcements(run_date: date, article_count: int) -> str:
    return _header(run_date) + f"No new product announcements in {article_count} relevant article(s).\n"


def render_confirmed(
    run_date: date,
    announced_count: int,
    confirmed: Sequence[ConfirmedNewBattery],
) -> str:
    md = _header(run_date)
    if not confirmed:
        md += f"All {announced_count} announced battery(ies) are already tracked in the database.\n"
        return md

    md += f"Found **{len(confirmed)}** new battery(ies) not in the database.\n"
    md += "After researching, add to `data/batteries_seed.csv` and run `battcat seed`.\n\n---\n\n"
    for i, item in enumerate(confirmed, 1):
        md += f"## {i}. {item.display_name}\n\n"
        md += f"- **Source:** {item.article_url}\n"
        md += f"- **Published:** {item.pub_date}\n"
        if item.key_specs:
            md += f"- **Specs mentioned:** {', '.join(item.key_specs)}\n"
        md += f"- **Notes:** {item.reason_new}\n"
        md += "\n---\n\n"
    return md


def write_report(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
