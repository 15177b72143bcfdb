"""Read queries against a seeded catalog."""

import sqlite3

import pytest

from battcat.catalog.models import Battery, Brand
from battcat.storage.repository import (
    get_all_batteries,
    get_all_brands,
    get_batteries_by_brand_slug,
    get_battery_by_slug,
    get_brand_by_slug,
    get_tracked_models,
)


class TestBatteries:
    def test_all_by_capacity_desc(self, seeded_db):
        batteries = get_all_batteries(seeded_db)
        assert [b.slug for b in batteries] == [
            "tesla-powerwall-3",
            "sonnen-eco-gen3",
            "sonnen-batterie-10",
            "enphase-iq-battery-5p",
        ]
        assert all(isinstance(b, Battery) for b in batteries)

    def test_brand_name_is_joined(self, seeded_db):
        battery = get_battery_by_slug("enphase-iq-battery-5p", seeded_db)
        assert battery.brand_name == "Enphase Energy"
        assert battery.display_name == "Enphase Energy IQ Battery 5P"

    def test_flags_are_booleans(self, seeded_db):
        battery = get_battery_by_slug("sonnen-batterie-10", seeded_db)
        assert battery.available_nl is True
        assert battery.available_us is False
        assert battery.warranty_cycles == 10000
        assert battery.notes == "Modular."

    def test_unknown_slug(self, seeded_db):
        assert get_battery_by_slug("does-not-exist", seeded_db) is None

    def test_by_brand_newest_first(self, seeded_db):
        batteries = get_batteries_by_brand_slug("sonnen", seeded_db)
        # NULL released_date sorts last under DESC in SQLite
        assert [b.slug for b in batteries] == ["sonnen-batterie-10", "sonnen-eco-gen3"]

    def test_by_unknown_brand(self, seeded_db):
        assert get_batteries_by_brand_slug("nobody", seeded_db) == []


class TestBrands:
    def test_all_by_name(self, seeded_db):
        assert [b.name for b in get_all_brands(seeded_db)] == ["Enphase Energy", "Tesla", "sonnen"]

    def test_by_slug(self, seeded_db):
        brand = get_brand_by_slug("tesla", seeded_db)
        assert brand == Brand(
            slug="tesla",
            name="Tesla",
            country="US",
            website_url="https://www.tesla.com",
            logo_url=None,
            description="Makes the Powerwall.",
        )

    def test_unknown_slug(self, seeded_db):
        assert get_brand_by_slug("nobody", seeded_db) is None


def test_tracked_models(seeded_db):
    tracked = sorted(get_tracked_models(seeded_db), key=lambda r: r["slug"])
    assert tracked[0] == {
        "brand_slug": "enphase",
        "model": "IQ Battery 5P",
        "slug": "enphase-iq-battery-5p",
    }
    assert len(tracked) == 4


def test_connections_are_read_only(seeded_db):
    from battcat.storage.repository import _connect

    conn = _connect(seeded_db)
    try:
        with pytest.raises(sqlite3.OperationalError):
            conn.execute("DELETE FROM brands")
    finally:
        conn.close()


def test_missing_database(tmp_path):
    with pytest.raises(sqlite3.OperationalError):
        get_all_batteries(tmp_path / "missing.db")
