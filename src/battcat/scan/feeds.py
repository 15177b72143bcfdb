"""News feed reading: config, concurrent fetch, RSS/Atom parsing, filtering."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional

import requests
from bs4 import BeautifulSoup

from ..config.rules import DESCRIPTION_MAX_CHARS, FEED_KEYWORDS
from ..config.settings import FEED_TIMEOUT, FEED_WORKERS, FEEDS_FILE
from ..utils.logging import get_logger
from .models import Article

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36 battcat-feed-reader"
    ),
    "Accept": "application/rss+xml,application/atom+xml,application/xml;q=0.9,*/*;q=0.8",
}

_LOWER_KEYWORDS = tuple(k.lower() for k in FEED_KEYWORDS)


class FeedSource(NamedTuple):
    name: str
    url: str


def load_feeds(path: Path = FEEDS_FILE) -> List[FeedSource]:
    """Read the ``[{name, url}, ...]`` feed list."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    feeds = []
    for entry in raw:
        name = str(entry.get("name") or "").strip()
        url = str(entry.get("url") or "").strip()
        if not url:
            logger.warning("Skipping feed without url: %s", entry)
            continue
        feeds.append(FeedSource(name=name or url, url=url))
    return feeds


def is_relevant(title: str, description: str) -> bool:
    text = f"{title or ''} {description or ''}".lower()
    return any(kw in text for kw in _LOWER_KEYWORDS)


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """RFC 822 (RSS) or ISO 8601 (Atom) to an aware UTC datetime."""
    s = (value or "").strip()
    if not s:
        return None
    parsed: Optional[datetime] = None
    try:
        parsed = parsedate_to_datetime(s)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is None:
        try:
            parsed = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _strip_html(text: str) -> str:
    if not text:
        return ""
    if "<" not in text:
        return " ".join(text.split())
    return BeautifulSoup(text, "html.parser").get_text(" ", strip=True)


def _first_text(node, names: Iterable[str]) -> str:
    for name in names:
        found = node.find(name)
        if found is not None:
            text = found.get_text()
            if text and text.strip():
                return text.strip()
    return ""


def _link_of(node) -> str:
    link = node.find("link")
    if link is None:
        return ""
    href = link.get("href")
    if href:
        return href.strip()
    return link.get_text().strip()


def parse_feed(content: bytes | str, source: str) -> List[Article]:
    """Parse every RSS ``<item>`` / Atom ``<entry>`` in a feed document."""
    soup = BeautifulSoup(content, "xml")
    nodes = soup.find_all("item") or soup.find_all("entry")
    articles = []
    for node in nodes:
        pub_date = _first_text(node, ("pubDate", "published", "updated", "date"))
        summary = _strip_html(_first_text(node, ("description", "summary", "encoded", "content")))
        articles.append(
            Article(
                title=_first_text(node, ("title",)),
                description=summary[:DESCRIPTION_MAX_CHARS],
                link=_link_of(node),
                pub_date=pub_date,
                source=source,
                published_at=parse_pub_date(pub_date),
                summary=summary,
            )
        )
    return articles


def filter_articles(articles: Iterable[Article], cutoff: datetime) -> List[Article]:
    """Keep keyword-relevant items published strictly after ``cutoff``.

    Items without a parseable date are dropped.
    """
    kept = []
    for article in articles:
        if article.published_at is None or article.published_at <= cutoff:
            continue
        if not is_relevant(article.title, article.summary or article.description):
            continue
        kept.append(article)
    return kept


def fetch_feed(feed: FeedSource, cutoff: datetime, timeout: float = FEED_TIMEOUT) -> List[Article]:
    response = requests.get(feed.url, headers=DEFAULT_HEADERS, timeout=timeout)
    response.raise_for_status()
    items = filter_articles(parse_feed(response.content, feed.name), cutoff)
    logger.info("  %s: %d relevant item(s)", feed.name, len(items))
    return items


FeedFetcher = Callable[[FeedSource, datetime], List[Article]]


def fetch_all_feeds(
    feeds: List[FeedSource],
    cutoff: datetime,
    fetcher: FeedFetcher = fetch_feed,
    max_workers: int = FEED_WORKERS,
) -> List[Article]:
    """Fetch all feeds concurrently; a failing feed contributes nothing.

    Results keep feed-config order.
    """
    if not feeds:
        return []

    per_feed: Dict[int, List[Article]] = {}
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(feeds)))) as ex:
        futures = {ex.submit(fetcher, feed, cutoff): i for i, feed in enumerate(feeds)}
        for fut, i in futures.items():
            try:
                per_feed[i] = fut.result()
            except (requests.RequestException, ValueError, OSError) as exc:
                logger.warning("  Failed to fetch %s: %s", feeds[i].name, exc)
            except Exception as exc:
                logger.warning("  Failed to fetch %s (unexpected): %s", feeds[i].name, exc, exc_info=True)

    results: List[Article] = []
    for i in range(len(feeds)):
        results.extend(per_feed.get(i, []))
    return results
