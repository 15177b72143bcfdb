"""Catalog ranking — per-key comparators and the stable single-key sort.

Direction is applied by negating the comparator, never by reversing the
sorted list, so equal records keep their input order in both directions.

Null policy per key:
  - warranty_years: missing compares as -1
  - price: missing compares as +infinity
  - released_date: missing compares after any date (nulls-last at the
    comparator level, which negation turns into nulls-first under desc)
"""

from __future__ import annotations

import functools
import math
import unicodedata
from typing import Callable, Dict, Iterable, List, Tuple

from ..config.rules import (
    BACKUP_ORDER,
    DEFAULT_SORT_DIRECTION,
    SORT_DIRECTIONS,
    SORT_KEYS,
)
from .models import Battery
from .pricing import resolve_price

Comparator = Callable[[Battery, Battery], int]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _collation_key(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold()


def compare_text(a: str, b: str) -> int:
    """Locale-style comparison: accents and case only break ties."""
    primary = _cmp(_collation_key(a), _collation_key(b))
    if primary:
        return primary
    return _cmp(a, b)


def _by_name(a: Battery, b: Battery) -> int:
    return compare_text(f"{a.brand_name} {a.model}", f"{b.brand_name} {b.model}")


def _by_chemistry(a: Battery, b: Battery) -> int:
    return _cmp(a.chemistry, b.chemistry)


def _by_capacity(a: Battery, b: Battery) -> int:
    return _cmp(a.usable_capacity_kwh, b.usable_capacity_kwh)


def _by_power(a: Battery, b: Battery) -> int:
    return _cmp(a.continuous_power_kw, b.continuous_power_kw)


def _by_backup(a: Battery, b: Battery) -> int:
    return _cmp(BACKUP_ORDER[a.backup_type], BACKUP_ORDER[b.backup_type])


def _warranty_value(battery: Battery) -> float:
    return battery.warranty_years if battery.warranty_years is not None else -1


def _by_warranty(a: Battery, b: Battery) -> int:
    return _cmp(_warranty_value(a), _warranty_value(b))


def _price_value(battery: Battery) -> float:
    quote = resolve_price(battery)
    return quote.amount if quote is not None else math.inf


def _by_price(a: Battery, b: Battery) -> int:
    # Currency-blind: dollars and euros compare as plain magnitudes.
    return _cmp(_price_value(a), _price_value(b))


def _by_released(a: Battery, b: Battery) -> int:
    da = a.released_date or ""
    db = b.released_date or ""
    if not da and not db:
        return 0
    if not da:
        return 1
    if not db:
        return -1
    return _cmp(da, db)


COMPARATORS: Dict[str, Comparator] = {
    "name": _by_name,
    "chemistry": _by_chemistry,
    "usable_capacity_kwh": _by_capacity,
    "continuous_power_kw": _by_power,
    "backup_type": _by_backup,
    "warranty_years": _by_warranty,
    "price": _by_price,
    "released_date": _by_released,
}


def get_comparator(key: str, direction: str = "asc") -> Comparator:
    if key not in COMPARATORS:
        raise ValueError(f"Unknown sort key: {key!r} (expected one of {', '.join(SORT_KEYS)})")
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Unknown sort direction: {direction!r} (expected 'asc' or 'desc')")

    base = COMPARATORS[key]
    if direction == "asc":
        return base

    def negated(a: Battery, b: Battery) -> int:
        return -base(a, b)

    return negated


def sort_batteries(batteries: Iterable[Battery], key: str, direction: str = "asc") -> List[Battery]:
    """Return a new, stably sorted list; the input is left untouched."""
    comparator = get_comparator(key, direction)
    return sorted(batteries, key=functools.cmp_to_key(comparator))


def next_sort_state(current_key: str, current_direction: str, clicked_key: str) -> Tuple[str, str]:
    """Header-click rule: same column flips direction, a new column starts desc."""
    if clicked_key == current_key:
        return current_key, "asc" if current_direction == "desc" else "desc"
    return clicked_key, DEFAULT_SORT_DIRECTION
