"""Seed pipeline: load the curated CSV files into a fresh SQLite store.

Each run drops and recreates both tables. Seed files are trusted input, so
integrity errors (unknown brand, out-of-range enum) are not caught: they abort
the run and leave the store partially filled.
"""

from __future__ import annotations

import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Optional

import pandas as pd

from ..config.settings import BATTERIES_SEED_FILE, BRANDS_SEED_FILE, DB_FILE
from ..utils.logging import get_logger
from .schema import (
    BATTERY_BOOL_COLUMNS,
    BATTERY_COLUMNS,
    BATTERY_FLOAT_COLUMNS,
    BATTERY_INT_COLUMNS,
    BATTERY_REQUIRED_TEXT_COLUMNS,
    BRAND_COLUMNS,
    BRAND_REQUIRED_TEXT_COLUMNS,
    CREATE_TABLES,
    DROP_TABLES,
    insert_sql,
)

logger = get_logger(__name__)


class SeedResult(NamedTuple):
    brands: int
    batteries: int


def to_bool(value: Any) -> int:
    """'true' -> 1, anything else -> 0."""
    return 1 if value == "true" else 0


def to_float(value: Any) -> Optional[float]:
    if value == "":
        return None
    return float(value)


def to_int(value: Any) -> Optional[int]:
    if value == "":
        return None
    return int(float(value))


def to_text(value: Any) -> Optional[str]:
    if value == "":
        return None
    return value


def _sanitize_column_name(name: Any) -> str:
    return str(name).replace("\ufeff", "").strip()


def read_seed_csv(path: Path) -> pd.DataFrame:
    """Read a seed file as strings, keeping empty cells as ''."""
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")
    encodings = ("utf-8-sig", "utf-8", "latin1")
    last_error: Exception | None = None
    for encoding in encodings:
        try:
            df = pd.read_csv(
                path,
                encoding=encoding,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
            df.columns = [_sanitize_column_name(c) for c in df.columns]
            return df
        except UnicodeDecodeError as e:
            last_error = e
    assert last_error is not None
    raise last_error


def _cell(row: Dict[str, Any], column: str) -> Any:
    value = row.get(column, "")
    return "" if value is None else value


def coerce_brand_row(row: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for column in BRAND_COLUMNS:
        value = _cell(row, column)
        out[column] = value if column in BRAND_REQUIRED_TEXT_COLUMNS else to_text(value)
    return out


def coerce_battery_row(row: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for column in BATTERY_COLUMNS:
        value = _cell(row, column)
        if column in BATTERY_BOOL_COLUMNS:
            out[column] = to_bool(value)
        elif column in BATTERY_FLOAT_COLUMNS:
            out[column] = to_float(value)
        elif column in BATTERY_INT_COLUMNS:
            out[column] = to_int(value)
        elif column in BATTERY_REQUIRED_TEXT_COLUMNS:
            out[column] = value
        else:
            out[column] = to_text(value)
    return out


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    return df.to_dict(orient="records")


def seed_database(
    db_path: Path = DB_FILE,
    brands_file: Path = BRANDS_SEED_FILE,
    batteries_file: Path = BATTERIES_SEED_FILE,
) -> SeedResult:
    """Drop, recreate and fill the ``brands`` and ``batteries`` tables."""
    brands = [coerce_brand_row(r) for r in _records(read_seed_csv(brands_file))]
    batteries = [coerce_battery_row(r) for r in _records(read_seed_csv(batteries_file))]

    db_path.parent.mkdir(parents=True, exist_ok=True)
    with closing(sqlite3.connect(db_path)) as conn:
        conn.execute("PRAGMA foreign_keys = ON")
        conn.executescript(DROP_TABLES + CREATE_TABLES)

        conn.executemany(insert_sql("brands", BRAND_COLUMNS), brands)
        conn.commit()
        logger.info("[OK] Inserted %d brands", len(brands))

        conn.executemany(insert_sql("batteries", BATTERY_COLUMNS), batteries)
        conn.commit()
        logger.info("[OK] Inserted %d batteries", len(batteries))

    logger.info("[OK] Database written to %s", db_path)
    return SeedResult(brands=len(brands), batteries=len(batteries))
