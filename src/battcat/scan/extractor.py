"""Find new residential battery launches among news snippets."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..utils.logging import get_logger
from .models import Article, CandidateAnnouncement
from .oracle import TextOracle, extract_json_array

logger = get_logger(__name__)

ANNOUNCEMENT_PROMPT = """You are reviewing article headlines and summaries from clean energy news sites.

Identify which of the following articles announce the LAUNCH or RELEASE of a new residential home battery product. A qualifying article must describe a specific new product being brought to market.

Do NOT include:
- Articles about existing products (reviews, comparisons, installations)
- Price changes, firmware updates, or accessories
- EV batteries or utility-scale / grid storage
- Vague mentions without a specific named product

For each qualifying article return a JSON object with:
- brand: manufacturer name
- model: product model name
- key_specs: array of specs mentioned (e.g. ["13.5 kWh", "LFP", "whole-home backup"])
- article_url: the article URL
- pub_date: publication date

Return ONLY a valid JSON array. If no articles qualify, return [].

Articles:
{articles}"""


def format_articles(articles: Sequence[Article]) -> str:
    blocks = []
    for i, item in enumerate(articles, 1):
        blocks.append(
            f"[{i}] Title: {item.title}\n"
            f"Source: {item.source} | Date: {item.pub_date}\n"
            f"URL: {item.link}\n"
            f"Summary: {item.description}"
        )
    return "\n\n".join(blocks)


def build_prompt(articles: Sequence[Article]) -> str:
    return ANNOUNCEMENT_PROMPT.format(articles=format_articles(articles))


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def to_spec_list(value: Any) -> List[str]:
    """Normalize ``key_specs`` to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [p.strip() for p in value.split(",") if p.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return [str(value)]


def candidate_from_dict(raw: Dict[str, Any]) -> CandidateAnnouncement:
    return CandidateAnnouncement(
        brand=as_text(raw.get("brand")),
        model=as_text(raw.get("model")),
        key_specs=to_spec_list(raw.get("key_specs")),
        article_url=as_text(raw.get("article_url")),
        pub_date=as_text(raw.get("pub_date")),
    )


def extract_announcements(articles: Sequence[Article], oracle: TextOracle) -> List[CandidateAnnouncement]:
    """Ask the oracle which articles announce a new product.

    Keeps the oracle's ordering. An unparseable reply yields [].
    """
    if not articles:
        return []
    reply = oracle.complete(build_prompt(articles))
    raw_items = extract_json_array(reply)
    candidates = [candidate_from_dict(item) for item in raw_items if isinstance(item, dict)]
    dropped = len(raw_items) - len(candidates)
    if dropped:
        logger.warning("Ignored %d non-object entries in oracle reply", dropped)
    return candidates
