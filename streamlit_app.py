from typing import List, Optional

import streamlit as st

from battcat.app.display import LIST_COLUMNS, batteries_frame, battery_details, backup_label
from battcat.catalog.models import Battery
from battcat.catalog.pricing import format_price
from battcat.catalog.ranking import next_sort_state, sort_batteries
from battcat.config.rules import (
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_KEY,
    SORT_KEYS,
    SORT_LABELS,
)
from battcat.config.settings import DB_FILE
from battcat.storage.repository import (
    get_all_batteries,
    get_all_brands,
    get_batteries_by_brand_slug,
    get_battery_by_slug,
    get_brand_by_slug,
)

st.set_page_config(page_title="Home Battery Catalog", page_icon="🔋", layout="wide")


@st.cache_data(show_spinner=False)
def _load_batteries(db_path: str) -> List[Battery]:
    return get_all_batteries(db_path)


def _db_ready() -> bool:
    return DB_FILE.exists()


def _sort_arrow(key: str) -> str:
    if st.session_state["sort_key"] != key:
        return " ↕"
    return " ↑" if st.session_state["sort_dir"] == "asc" else " ↓"


def _on_header_click(key: str) -> None:
    new_key, new_dir = next_sort_state(
        st.session_state["sort_key"], st.session_state["sort_dir"], key
    )
    st.session_state["sort_key"] = new_key
    st.session_state["sort_dir"] = new_dir


def _select_battery(slug: str) -> None:
    st.session_state["view"] = "Battery"
    st.session_state["battery_slug"] = slug


def _render_list(batteries: List[Battery]) -> None:
    header = st.columns(len(SORT_KEYS))
    for col, key in zip(header, SORT_KEYS):
        col.button(
            SORT_LABELS[key] + _sort_arrow(key),
            key=f"sort_{key}",
            on_click=_on_header_click,
            args=(key,),
            use_container_width=True,
        )

    ordered = sort_batteries(batteries, st.session_state["sort_key"], st.session_state["sort_dir"])
    df = batteries_frame(ordered)
    st.dataframe(df[[c for c in LIST_COLUMNS if c != "slug"]], hide_index=True, use_container_width=True)

    slugs = [b.slug for b in ordered]
    labels = {b.slug: b.display_name for b in ordered}
    chosen = st.selectbox("Open battery", slugs, format_func=lambda s: labels.get(s, s))
    if chosen:
        st.button("Show details", on_click=_select_battery, args=(chosen,))


def _render_battery(slug: Optional[str]) -> None:
    battery = get_battery_by_slug(slug, DB_FILE) if slug else None
    if battery is None:
        st.warning("Battery not found.")
        return

    st.caption(battery.brand_name)
    st.header(battery.model)
    if battery.image_url:
        st.image(battery.image_url, width=320)

    top = st.columns(4)
    top[0].metric("Usable capacity", f"{battery.usable_capacity_kwh:g} kWh")
    top[1].metric("Continuous power", f"{battery.continuous_power_kw:g} kW")
    top[2].metric("Backup", backup_label(battery.backup_type))
    top[3].metric("Price", format_price(battery))

    for title, pairs in battery_details(battery):
        with st.expander(title, expanded=title in ("Core specs", "Pricing & availability")):
            for label, value in pairs:
                st.markdown(f"**{label}:** {value}")
    if battery.notes:
        st.info(battery.notes)


def _render_brand(slug: Optional[str]) -> None:
    brand = get_brand_by_slug(slug, DB_FILE) if slug else None
    if brand is None:
        st.warning("Brand not found.")
        return

    st.header(brand.name)
    if brand.country:
        st.caption(brand.country)
    if brand.description:
        st.markdown(brand.description)
    if brand.website_url:
        st.markdown(f"[Website]({brand.website_url})")

    batteries = get_batteries_by_brand_slug(brand.slug, DB_FILE)
    st.subheader(f"{len(batteries)} battery(ies)")
    df = batteries_frame(batteries)
    st.dataframe(df[[c for c in LIST_COLUMNS if c != "slug"]], hide_index=True, use_container_width=True)


st.title("Home Battery Catalog")

if "sort_key" not in st.session_state:
    st.session_state["sort_key"] = DEFAULT_SORT_KEY
if "sort_dir" not in st.session_state:
    st.session_state["sort_dir"] = DEFAULT_SORT_DIRECTION
if "view" not in st.session_state:
    st.session_state["view"] = "Catalog"
if "battery_slug" not in st.session_state:
    st.session_state["battery_slug"] = None

if not _db_ready():
    st.error(f"No catalog database at {DB_FILE}. Run `battcat seed` first.")
    st.stop()

st.sidebar.header("Browse")
st.sidebar.radio("View", ["Catalog", "Battery", "Brand"], key="view")

if st.sidebar.button("Reload data"):
    _load_batteries.clear()

all_batteries = _load_batteries(str(DB_FILE))
st.sidebar.caption(f"{len(all_batteries)} batteries tracked")

view = st.session_state["view"]
if view == "Catalog":
    _render_list(all_batteries)
elif view == "Battery":
    slugs = [b.slug for b in all_batteries]
    if st.session_state["battery_slug"] not in slugs:
        st.session_state["battery_slug"] = slugs[0] if slugs else None
    labels = {b.slug: b.display_name for b in all_batteries}
    st.sidebar.selectbox(
        "Battery", slugs, key="battery_slug", format_func=lambda s: labels.get(s, s)
    )
    _render_battery(st.session_state["battery_slug"])
else:
    brands = get_all_brands(DB_FILE)
    brand_names = {b.slug: b.name for b in brands}
    brand_slug = st.sidebar.selectbox(
        "Brand", list(brand_names), format_func=lambda s: brand_names.get(s, s)
    )
    _render_brand(brand_slug)
