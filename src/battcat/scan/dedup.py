"""Decide which announced batteries the catalog does not track yet."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..utils.logging import get_logger
from .extractor import as_text, to_spec_list
from .models import CandidateAnnouncement, ConfirmedNewBattery
from .oracle import TextOracle, extract_json_array

logger = get_logger(__name__)

CROSS_CHECK_PROMPT = """You are comparing newly announced batteries against an existing database to find ones we don't track yet.

EXISTING DATABASE ({count} batteries):
{catalog}

NEWLY ANNOUNCED (to check):
{candidates}

For each newly announced battery, check if it is already in the database. Account for name variations (e.g. "Powerwall 3" matches "tesla-powerwall-3", "IQ Battery 5P" matches "enphase-iq-battery-5p").

Return a JSON array of ONLY the batteries NOT already in the database. Each object must have:
- brand: manufacturer name
- model: product model name
- key_specs: specs mentioned
- article_url: source URL
- pub_date: publication date
- reason_new: one sentence explaining why this is not in the database

Return ONLY a valid JSON array. If all are already tracked, return []."""


def build_prompt(candidates: Sequence[CandidateAnnouncement], catalog: Sequence[Mapping[str, Any]]) -> str:
    catalog_lines = "\n".join(
        f"- {row['brand_slug']} / {row['model']} (slug: {row['slug']})" for row in catalog
    )
    candidate_lines = "\n".join(f"[{i}] {c.brand} {c.model}" for i, c in enumerate(candidates, 1))
    return CROSS_CHECK_PROMPT.format(
        count=len(catalog),
        catalog=catalog_lines,
        candidates=candidate_lines,
    )


def models_match(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction.

    A blank model is contained in every model, so it matches the first candidate.
    """
    a_norm = (a or "").lower()
    b_norm = (b or "").lower()
    return a_norm in b_norm or b_norm in a_norm


def find_original(
    model: str, candidates: Sequence[CandidateAnnouncement]
) -> Optional[CandidateAnnouncement]:
    """First candidate (in candidate order) whose model contains or is contained in ``model``."""
    for candidate in candidates:
        if models_match(candidate.model, model):
            return candidate
    return None


def merge_fields(primary: Mapping[str, Any], fallback: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay ``primary`` onto ``fallback``; every primary key wins, empty or not."""
    merged = dict(fallback or {})
    merged.update(primary or {})
    return merged


def confirmed_from_dict(raw: Mapping[str, Any]) -> ConfirmedNewBattery:
    return ConfirmedNewBattery(
        brand=as_text(raw.get("brand")),
        model=as_text(raw.get("model")),
        key_specs=to_spec_list(raw.get("key_specs")),
        article_url=as_text(raw.get("article_url")),
        pub_date=as_text(raw.get("pub_date")),
        reason_new=as_text(raw.get("reason_new")),
    )


def merge_with_originals(
    confirmed: Sequence[Mapping[str, Any]],
    candidates: Sequence[CandidateAnnouncement],
) -> List[ConfirmedNewBattery]:
    """Recover fields the oracle dropped from the matching original candidate."""
    out = []
    for item in confirmed:
        original = find_original(as_text(item.get("model")), candidates)
        if original is None:
            logger.debug("No original candidate for %r; keeping oracle fields", item.get("model"))
            out.append(confirmed_from_dict(item))
            continue
        out.append(confirmed_from_dict(merge_fields(primary=item, fallback=original.to_dict())))
    return out


def dedup_candidates(
    candidates: Sequence[CandidateAnnouncement],
    catalog: Sequence[Mapping[str, Any]],
    oracle: TextOracle,
) -> List[ConfirmedNewBattery]:
    if not candidates:
        return []
    reply = oracle.complete(build_prompt(candidates, catalog))
    confirmed = [item for item in extract_json_array(reply) if isinstance(item, dict)]
    return merge_with_originals(confirmed, candidates)
