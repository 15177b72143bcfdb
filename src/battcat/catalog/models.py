"""Read models for catalog rows."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

BOOL_FIELDS = (
    "ac_coupled",
    "scalable",
    "indoor_rated",
    "outdoor_rated",
    "available_nl",
    "available_fr",
    "available_us",
)


@dataclass(frozen=True)
class Brand:
    slug: str
    name: str
    country: Optional[str] = None
    website_url: Optional[str] = None
    logo_url: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Brand":
        return cls(**_pick(cls, row))


@dataclass(frozen=True)
class Battery:
    slug: str
    brand_slug: str
    model: str
    usable_capacity_kwh: float
    continuous_power_kw: float
    chemistry: str
    backup_type: str
    brand_name: str = ""
    manufacturer_sku: Optional[str] = None
    status: str = "available"
    released_date: Optional[str] = None
    image_url: Optional[str] = None
    datasheet_url: Optional[str] = None
    product_url: Optional[str] = None
    total_capacity_kwh: Optional[float] = None
    peak_power_kw: Optional[float] = None
    max_charge_rate_kw: Optional[float] = None
    ac_coupled: bool = False
    scalable: bool = False
    roundtrip_efficiency_pct: Optional[float] = None
    depth_of_discharge_pct: Optional[float] = None
    warranty_years: Optional[float] = None
    warranty_cycles: Optional[int] = None
    warranty_throughput_kwh: Optional[float] = None
    weight_kg: Optional[float] = None
    indoor_rated: bool = False
    outdoor_rated: bool = False
    ip_rating: Optional[str] = None
    operating_temp_min_c: Optional[float] = None
    operating_temp_max_c: Optional[float] = None
    price_nl: Optional[float] = None
    price_fr: Optional[float] = None
    price_us: Optional[float] = None
    price_note: Optional[str] = None
    available_nl: bool = False
    available_fr: bool = False
    available_us: bool = False
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.brand_name} {self.model}"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Battery":
        """Build from a joined ``batteries``/``brands`` row (SQLite 0/1 flags)."""
        values = _pick(cls, row)
        for name in BOOL_FIELDS:
            if name in values:
                values[name] = bool(values[name])
        if values.get("brand_name") is None:
            values["brand_name"] = ""
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _pick(cls, row: Mapping[str, Any]) -> Dict[str, Any]:
    keys = set(row.keys())
    return {f.name: row[f.name] for f in fields(cls) if f.name in keys}
