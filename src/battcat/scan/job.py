"""Announcement scan: feeds -> extraction -> dedup -> dated report."""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import NamedTuple, Optional

from ..config.settings import DB_FILE, FEEDS_FILE, HISTORY_FILE, REPORTS_DIR
from ..storage.repository import get_tracked_models
from ..utils.logging import get_logger
from .dedup import dedup_candidates
from .extractor import extract_announcements
from .feeds import FeedFetcher, fetch_all_feeds, fetch_feed, load_feeds
from .history import get_cutoff, record_run
from .oracle import AnthropicOracle, MissingCredentialError, TextOracle, require_api_key
from .report import (
    render_confirmed,
    render_no_announcements,
    render_nothing_relevant,
    report_path,
    write_report,
)

logger = get_logger(__name__)


class ScanSummary(NamedTuple):
    report: Path
    feeds: int
    articles: int
    announced: int
    confirmed: int


def run_scan(
    oracle: Optional[TextOracle] = None,
    now: Optional[datetime] = None,
    feeds_file: Path = FEEDS_FILE,
    db_path: Path = DB_FILE,
    history_file: Path = HISTORY_FILE,
    reports_dir: Path = REPORTS_DIR,
    fetcher: FeedFetcher = fetch_feed,
) -> ScanSummary:
    """Run one scan and write its report. Oracle and storage errors propagate."""
    if oracle is None:
        oracle = AnthropicOracle(api_key=require_api_key())

    now = now or datetime.now(timezone.utc)
    today: date = now.date()
    out_path = report_path(today, reports_dir)

    cutoff = get_cutoff(history_file, now=now)
    feeds = load_feeds(feeds_file)

    logger.info("Fetching %d RSS feed(s)...", len(feeds))
    articles = fetch_all_feeds(feeds, cutoff, fetcher=fetcher)
    logger.info("Total: %d relevant article(s) since cutoff", len(articles))

    def _finish(content: str, announced: int = 0, confirmed: int = 0) -> ScanSummary:
        write_report(out_path, content)
        record_run(today, out_path.name, len(articles), announced, confirmed, path=history_file)
        logger.info("Output: %s", out_path)
        logger.info(
            "Summary: %d feeds, %d relevant articles, %d announcements, %d new to database",
            len(feeds), len(articles), announced, confirmed,
        )
        return ScanSummary(out_path, len(feeds), len(articles), announced, confirmed)

    if not articles:
        return _finish(render_nothing_relevant(today, cutoff.date()))

    logger.info("Scanning for new product announcements...")
    announced = extract_announcements(articles, oracle)
    logger.info("%d potential new product(s) found", len(announced))

    if not announced:
        return _finish(render_no_announcements(today, len(articles)))

    tracked = get_tracked_models(db_path)
    logger.info("Database: %d battery(ies) tracked", len(tracked))

    logger.info("Cross-checking against database...")
    confirmed = dedup_candidates(announced, tracked, oracle)
    logger.info("%d new battery(ies) confirmed", len(confirmed))

    return _finish(
        render_confirmed(today, len(announced), confirmed),
        announced=len(announced),
        confirmed=len(confirmed),
    )


def run_scan_job(**kwargs) -> int:
    """Top-level wrapper: 0 on success, 1 on any failure."""
    try:
        run_scan(**kwargs)
    except MissingCredentialError as exc:
        logger.error("%s", exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=True)
        return 1
    return 0
