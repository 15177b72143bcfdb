"""Presentation helpers shared by the CLI and the Streamlit app."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..catalog.models import Battery, Brand
from ..catalog.pricing import availability_tags, format_price
from ..config.rules import BACKUP_LABELS, MISSING_PLACEHOLDER

LIST_COLUMNS = [
    "Battery", "Type", "Capacity", "Cont. power", "Backup",
    "Warranty", "Released", "Markets", "Price", "slug",
]


def _num(value: Optional[float]) -> str:
    if value is None:
        return MISSING_PLACEHOLDER
    value = float(value)
    if value.is_integer():
        return f"{value:,.0f}"
    return f"{value:,.1f}"


def _with_unit(value: Optional[float], unit: str) -> str:
    if value is None:
        return MISSING_PLACEHOLDER
    return f"{_num(value)} {unit}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _text(value: Optional[str]) -> str:
    return value if value else MISSING_PLACEHOLDER


def backup_label(backup_type: str) -> str:
    return BACKUP_LABELS.get(backup_type, backup_type)


def release_year(battery: Battery) -> str:
    return battery.released_date[:4] if battery.released_date else MISSING_PLACEHOLDER


def battery_row(battery: Battery) -> Dict[str, Any]:
    """One list-view row, in column order."""
    return {
        "Battery": battery.display_name,
        "Type": battery.chemistry,
        "Capacity": _with_unit(battery.usable_capacity_kwh, "kWh"),
        "Cont. power": _with_unit(battery.continuous_power_kw, "kW"),
        "Backup": backup_label(battery.backup_type),
        "Warranty": _with_unit(battery.warranty_years, "yr"),
        "Released": release_year(battery),
        "Markets": " ".join(availability_tags(battery)),
        "Price": format_price(battery),
        "slug": battery.slug,
    }


def batteries_frame(batteries: Sequence[Battery]) -> pd.DataFrame:
    return pd.DataFrame([battery_row(b) for b in batteries], columns=LIST_COLUMNS)


def format_battery_table(batteries: Sequence[Battery]) -> str:
    if not batteries:
        return "(no batteries)"
    return batteries_frame(batteries).drop(columns=["slug"]).to_string(index=False)


def battery_details(battery: Battery) -> List[Tuple[str, List[Tuple[str, str]]]]:
    """Detail view grouped into titled sections."""
    temp_range = MISSING_PLACEHOLDER
    if battery.operating_temp_min_c is not None or battery.operating_temp_max_c is not None:
        temp_range = (
            f"{_num(battery.operating_temp_min_c)} to {_num(battery.operating_temp_max_c)} °C"
        )

    return [
        ("Overview", [
            ("Brand", battery.brand_name),
            ("Model", battery.model),
            ("SKU", _text(battery.manufacturer_sku)),
            ("Status", battery.status),
            ("Released", _text(battery.released_date)),
        ]),
        ("Core specs", [
            ("Usable capacity", _with_unit(battery.usable_capacity_kwh, "kWh")),
            ("Total capacity", _with_unit(battery.total_capacity_kwh, "kWh")),
            ("Continuous power", _with_unit(battery.continuous_power_kw, "kW")),
            ("Peak power", _with_unit(battery.peak_power_kw, "kW")),
            ("Max charge rate", _with_unit(battery.max_charge_rate_kw, "kW")),
        ]),
        ("Technology", [
            ("Chemistry", battery.chemistry),
            ("AC coupled", _yes_no(battery.ac_coupled)),
            ("Backup", backup_label(battery.backup_type)),
            ("Scalable", _yes_no(battery.scalable)),
        ]),
        ("Efficiency & lifespan", [
            ("Round-trip efficiency", _with_unit(battery.roundtrip_efficiency_pct, "%")),
            ("Depth of discharge", _with_unit(battery.depth_of_discharge_pct, "%")),
            ("Warranty", _with_unit(battery.warranty_years, "yr")),
            ("Warranty cycles", _num(battery.warranty_cycles)),
            ("Warranty throughput", _with_unit(battery.warranty_throughput_kwh, "kWh")),
        ]),
        ("Physical", [
            ("Weight", _with_unit(battery.weight_kg, "kg")),
            ("Indoor rated", _yes_no(battery.indoor_rated)),
            ("Outdoor rated", _yes_no(battery.outdoor_rated)),
            ("IP rating", _text(battery.ip_rating)),
            ("Operating temperature", temp_range),
        ]),
        ("Pricing & availability", [
            ("Price", format_price(battery)),
            ("Price note", _text(battery.price_note)),
            ("Markets", " ".join(availability_tags(battery)) or MISSING_PLACEHOLDER),
        ]),
        ("Links", [
            ("Product page", _text(battery.product_url)),
            ("Datasheet", _text(battery.datasheet_url)),
        ]),
    ]


def format_battery_detail(battery: Battery) -> str:
    lines = [battery.display_name, "=" * len(battery.display_name)]
    for title, pairs in battery_details(battery):
        lines.append("")
        lines.append(title)
        lines.append("-" * len(title))
        width = max(len(label) for label, _ in pairs)
        for label, value in pairs:
            lines.append(f"{label.ljust(width)}  {value}")
    if battery.notes:
        lines += ["", "Notes", "-----", battery.notes]
    return "\n".join(lines)


def format_brand(brand: Brand, batteries: Sequence[Battery]) -> str:
    lines = [brand.name, "=" * len(brand.name)]
    if brand.country:
        lines.append(f"Country: {brand.country}")
    if brand.website_url:
        lines.append(f"Website: {brand.website_url}")
    if brand.description:
        lines += ["", brand.description]
    lines += ["", f"{len(batteries)} battery(ies)", format_battery_table(batteries)]
    return "\n".join(lines)


def format_brand_list(brands: Sequence[Brand]) -> str:
    if not brands:
        return "(no brands)"
    df = pd.DataFrame(
        [{"slug": b.slug, "name": b.name, "country": _text(b.country)} for b in brands]
    )
    return df.to_string(index=False)
