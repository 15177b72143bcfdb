"""Read access to the seeded catalog.

Every query opens its own read-only connection and closes it before
returning; callers get point-in-time snapshots, never a shared handle.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from ..catalog.models import Battery, Brand
from ..config.settings import DB_FILE
from ..utils.logging import get_logger

logger = get_logger(__name__)

_BATTERY_SELECT = """
    SELECT b.*, br.name AS brand_name
    FROM batteries b
    JOIN brands br ON b.brand_slug = br.slug
"""


def _connect(db_path: Path) -> sqlite3.Connection:
    uri = Path(db_path).resolve().as_uri() + "?mode=ro"
    conn = sqlite3.connect(uri, uri=True)
    conn.row_factory = sqlite3.Row
    return conn


def _fetch_all(db_path: Path, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
    with closing(_connect(db_path)) as conn:
        return conn.execute(sql, params).fetchall()


def _fetch_one(db_path: Path, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
    with closing(_connect(db_path)) as conn:
        return conn.execute(sql, params).fetchone()


def get_all_batteries(db_path: Path = DB_FILE) -> List[Battery]:
    """All batteries, largest usable capacity first."""
    rows = _fetch_all(db_path, _BATTERY_SELECT + " ORDER BY b.usable_capacity_kwh DESC")
    logger.debug("Loaded %d batteries from %s", len(rows), db_path)
    return [Battery.from_row(r) for r in rows]


def get_battery_by_slug(slug: str, db_path: Path = DB_FILE) -> Optional[Battery]:
    row = _fetch_one(db_path, _BATTERY_SELECT + " WHERE b.slug = ?", (slug,))
    return Battery.from_row(row) if row is not None else None


def get_all_brands(db_path: Path = DB_FILE) -> List[Brand]:
    rows = _fetch_all(db_path, "SELECT * FROM brands ORDER BY name")
    return [Brand.from_row(r) for r in rows]


def get_brand_by_slug(slug: str, db_path: Path = DB_FILE) -> Optional[Brand]:
    row = _fetch_one(db_path, "SELECT * FROM brands WHERE slug = ?", (slug,))
    return Brand.from_row(row) if row is not None else None


def get_batteries_by_brand_slug(brand_slug: str, db_path: Path = DB_FILE) -> List[Battery]:
    """A brand's batteries, most recently released first."""
    rows = _fetch_all(
        db_path,
        _BATTERY_SELECT + " WHERE b.brand_slug = ? ORDER BY b.released_date DESC",
        (brand_slug,),
    )
    return [Battery.from_row(r) for r in rows]


def get_tracked_models(db_path: Path = DB_FILE) -> List[Dict[str, str]]:
    """(brand_slug, model, slug) triples used to cross-check announcements."""
    rows = _fetch_all(db_path, "SELECT brand_slug, model, slug FROM batteries")
    return [{"brand_slug": r["brand_slug"], "model": r["model"], "slug": r["slug"]} for r in rows]
