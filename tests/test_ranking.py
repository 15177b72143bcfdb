"""Unit tests for battcat.catalog.ranking."""

import pytest

from battcat.catalog.ranking import (
    compare_text,
    get_comparator,
    next_sort_state,
    sort_batteries,
)
from battcat.config.rules import SORT_KEYS


def _slugs(batteries):
    return [b.slug for b in batteries]


@pytest.fixture
def distinct_batteries(make_battery):
    """Three records with pairwise-distinct values for every sort key."""
    return [
        make_battery(
            slug="b", brand_name="Sonnen", model="Eco", chemistry="NMC",
            usable_capacity_kwh=10.0, continuous_power_kw=4.6, backup_type="none",
            warranty_years=None, price_us=None, price_nl=6200.0, released_date="2020-02-01",
        ),
        make_battery(
            slug="a", brand_name="Tesla", model="Powerwall 3", chemistry="LFP",
            usable_capacity_kwh=13.5, continuous_power_kw=11.5, backup_type="whole_home",
            warranty_years=10.0, price_us=9300.0, released_date="2023-09-01",
        ),
        make_battery(
            slug="c", brand_name="Enphase", model="IQ Battery 5P", chemistry="NCA",
            usable_capacity_kwh=5.0, continuous_power_kw=3.84, backup_type="essential_circuits",
            warranty_years=15.0, price_us=None, price_nl=None, released_date=None,
        ),
    ]


# ============================================================================
# Direction and stability
# ============================================================================
class TestDirection:
    @pytest.mark.parametrize("key", SORT_KEYS)
    def test_desc_is_reverse_of_asc_without_ties(self, distinct_batteries, key):
        asc = sort_batteries(distinct_batteries, key, "asc")
        desc = sort_batteries(asc, key, "desc")
        assert _slugs(desc) == list(reversed(_slugs(asc)))

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_ties_keep_input_order(self, make_battery, direction):
        first = make_battery(slug="first", usable_capacity_kwh=10.0)
        other = make_battery(slug="other", usable_capacity_kwh=20.0)
        second = make_battery(slug="second", usable_capacity_kwh=10.0)

        result = _slugs(sort_batteries([first, other, second], "usable_capacity_kwh", direction))

        assert result.index("first") < result.index("second")

    def test_input_is_not_mutated(self, distinct_batteries):
        before = list(distinct_batteries)
        sort_batteries(distinct_batteries, "name", "desc")
        assert distinct_batteries == before

    def test_returns_new_list(self, distinct_batteries):
        assert sort_batteries(distinct_batteries, "price") is not distinct_batteries

    def test_unknown_key(self, distinct_batteries):
        with pytest.raises(ValueError):
            sort_batteries(distinct_batteries, "weight_kg")

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            get_comparator("name", "up")


# ============================================================================
# Per-key rules
# ============================================================================
class TestKeys:
    def test_name_ignores_case(self, make_battery):
        upper = make_battery(slug="upper", brand_name="Enphase", model="IQ")
        lower = make_battery(slug="lower", brand_name="byd", model="HVS")
        assert _slugs(sort_batteries([upper, lower], "name", "asc")) == ["lower", "upper"]

    def test_name_ignores_accents(self, make_battery):
        plain = make_battery(slug="plain", brand_name="Ezy", model="1")
        accented = make_battery(slug="accented", brand_name="Élan", model="1")
        assert _slugs(sort_batteries([plain, accented], "name", "asc")) == ["accented", "plain"]

    def test_compare_text_case_only_breaks_ties(self):
        assert compare_text("abc", "abd") < 0
        assert compare_text("ABC", "abd") < 0
        assert compare_text("abc", "abc") == 0

    def test_chemistry_is_alphabetical(self, make_battery):
        items = [make_battery(slug=c, chemistry=c) for c in ("Other", "NMC", "LFP", "NCA")]
        assert _slugs(sort_batteries(items, "chemistry", "asc")) == ["LFP", "NCA", "NMC", "Other"]

    def test_backup_type_is_ordinal(self, make_battery):
        items = [
            make_battery(slug="whole", backup_type="whole_home"),
            make_battery(slug="none", backup_type="none"),
            make_battery(slug="essential", backup_type="essential_circuits"),
        ]
        assert _slugs(sort_batteries(items, "backup_type", "asc")) == ["none", "essential", "whole"]

    def test_power_is_numeric(self, make_battery):
        items = [
            make_battery(slug="ten", continuous_power_kw=10.0),
            make_battery(slug="nine", continuous_power_kw=9.0),
        ]
        assert _slugs(sort_batteries(items, "continuous_power_kw", "asc")) == ["nine", "ten"]


# ============================================================================
# Null handling
# ============================================================================
class TestNulls:
    def test_missing_warranty_sorts_as_minus_one(self, make_battery):
        items = [
            make_battery(slug="ten", warranty_years=10.0),
            make_battery(slug="missing", warranty_years=None),
            make_battery(slug="zero", warranty_years=0.0),
        ]
        assert _slugs(sort_batteries(items, "warranty_years", "asc")) == ["missing", "zero", "ten"]
        assert _slugs(sort_batteries(items, "warranty_years", "desc")) == ["ten", "zero", "missing"]

    def test_missing_price_sorts_as_infinity(self, make_battery):
        items = [
            make_battery(slug="none"),
            make_battery(slug="eur", price_nl=7000.0),
            make_battery(slug="usd", price_us=9000.0),
        ]
        assert _slugs(sort_batteries(items, "price", "asc")) == ["eur", "usd", "none"]
        assert _slugs(sort_batteries(items, "price", "desc")) == ["none", "usd", "eur"]

    def test_price_sort_ignores_currency(self, make_battery):
        dollars = make_battery(slug="dollars", price_us=5000.0, price_nl=100.0)
        euros = make_battery(slug="euros", price_nl=4000.0)
        assert _slugs(sort_batteries([dollars, euros], "price", "asc")) == ["euros", "dollars"]

    def test_two_missing_prices_are_equal(self, make_battery):
        items = [make_battery(slug="x"), make_battery(slug="y")]
        assert _slugs(sort_batteries(items, "price", "desc")) == ["x", "y"]

    def test_missing_release_date_last_asc_first_desc(self, make_battery):
        items = [
            make_battery(slug="undated", released_date=None),
            make_battery(slug="old", released_date="2019-01-01"),
            make_battery(slug="new", released_date="2024-05-01"),
        ]
        assert _slugs(sort_batteries(items, "released_date", "asc")) == ["old", "new", "undated"]
        assert _slugs(sort_batteries(items, "released_date", "desc")) == ["undated", "new", "old"]

    def test_empty_release_date_counts_as_missing(self, make_battery):
        items = [
            make_battery(slug="blank", released_date=""),
            make_battery(slug="dated", released_date="2021-01-01"),
        ]
        assert _slugs(sort_batteries(items, "released_date", "asc")) == ["dated", "blank"]


# ============================================================================
# next_sort_state
# ============================================================================
class TestNextSortState:
    def test_same_key_flips_direction(self):
        assert next_sort_state("price", "desc", "price") == ("price", "asc")
        assert next_sort_state("price", "asc", "price") == ("price", "desc")

    def test_new_key_starts_descending(self):
        assert next_sort_state("price", "asc", "name") == ("name", "desc")
