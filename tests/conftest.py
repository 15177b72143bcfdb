"""Shared fixtures for the battcat test suite."""

import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path so "import battcat" works when running from repo root.
repo_root = Path(__file__).resolve().parents[1]
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from battcat.catalog.models import Battery  # noqa: E402
from battcat.scan.oracle import TextOracle  # noqa: E402
from battcat.storage.seed import seed_database  # noqa: E402

DATA_DIR = repo_root / "data"

BRANDS_CSV = """slug,name,country,website_url,logo_url,description
tesla,Tesla,US,https://www.tesla.com,,Makes the Powerwall.
enphase,Enphase Energy,US,,,
sonnen,sonnen,DE,,,"Home storage, since 2010."
"""

BATTERY_HEADER = (
    "slug,brand_slug,model,manufacturer_sku,status,released_date,image_url,datasheet_url,"
    "product_url,usable_capacity_kwh,total_capacity_kwh,continuous_power_kw,peak_power_kw,"
    "max_charge_rate_kw,chemistry,ac_coupled,backup_type,scalable,roundtrip_efficiency_pct,"
    "depth_of_discharge_pct,warranty_years,warranty_cycles,warranty_throughput_kwh,weight_kg,"
    "indoor_rated,outdoor_rated,ip_rating,operating_temp_min_c,operating_temp_max_c,price_nl,"
    "price_fr,price_us,price_note,available_nl,available_fr,available_us,notes"
)

BATTERIES_CSV = BATTERY_HEADER + """
tesla-powerwall-3,tesla,Powerwall 3,1707000,available,2023-09-01,,,,13.5,,11.5,30,5,LFP,false,whole_home,true,89,100,10,,37800,130,true,true,IP67,-20,50,,,9300,,false,false,true,
enphase-iq-battery-5p,enphase,IQ Battery 5P,,available,2023-06-15,,,,5,5,3.84,7.68,3.84,LFP,true,essential_circuits,true,90,100,15,6000,,66.8,true,true,IP55,-15,55,,,4500,,false,false,true,
sonnen-batterie-10,sonnen,sonnenBatterie 10,,available,2020-02-01,,,,5.5,,4.6,,,LFP,true,essential_circuits,true,,,10,10000,,63,true,false,,,,6200,6500,,,true,true,false,Modular.
sonnen-eco-gen3,sonnen,sonnenBatterie eco Gen 3,,upcoming,,,,,10,,4.8,,,NMC,true,none,false,,,,,,,true,false,,,,,,,,false,false,false,
"""


class FakeOracle(TextOracle):
    """Returns canned replies in order and records every prompt."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if not self.replies:
            raise AssertionError("FakeOracle called more times than expected")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_oracle():
    return FakeOracle


@pytest.fixture
def make_battery():
    """Factory for Battery records with sensible defaults."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        values = {
            "slug": f"battery-{counter['n']}",
            "brand_slug": "acme",
            "brand_name": "Acme",
            "model": f"Model {counter['n']}",
            "usable_capacity_kwh": 10.0,
            "continuous_power_kw": 5.0,
            "chemistry": "LFP",
            "backup_type": "whole_home",
        }
        values.update(overrides)
        return Battery(**values)

    return _make


@pytest.fixture
def seed_files(tmp_path):
    """Small brands/batteries CSV pair written to a temp directory."""
    brands = tmp_path / "brands_seed.csv"
    batteries = tmp_path / "batteries_seed.csv"
    brands.write_text(BRANDS_CSV, encoding="utf-8")
    batteries.write_text(BATTERIES_CSV, encoding="utf-8")
    return brands, batteries


@pytest.fixture
def seeded_db(tmp_path, seed_files):
    """A freshly seeded SQLite catalog built from ``seed_files``."""
    db_path = tmp_path / "batteries.db"
    brands, batteries = seed_files
    seed_database(db_path=db_path, brands_file=brands, batteries_file=batteries)
    return db_path
