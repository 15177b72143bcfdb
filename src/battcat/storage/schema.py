"""DDL for the catalog store. Seeding drops and recreates both tables."""

DROP_TABLES = """
DROP TABLE IF EXISTS batteries;
DROP TABLE IF EXISTS brands;
"""

CREATE_TABLES = """
CREATE TABLE brands (
    slug          TEXT PRIMARY KEY NOT NULL,
    name          TEXT NOT NULL,
    country       TEXT,
    website_url   TEXT,
    logo_url      TEXT,
    description   TEXT
);

CREATE TABLE batteries (
    slug                      TEXT PRIMARY KEY NOT NULL,
    brand_slug                TEXT NOT NULL REFERENCES brands(slug),
    model                     TEXT NOT NULL,
    manufacturer_sku          TEXT,
    status                    TEXT NOT NULL DEFAULT 'available'
                                CHECK(status IN ('available', 'discontinued', 'upcoming')),
    released_date             TEXT,
    image_url                 TEXT,
    datasheet_url             TEXT,
    product_url               TEXT,

    usable_capacity_kwh       REAL NOT NULL CHECK(usable_capacity_kwh > 0),
    total_capacity_kwh        REAL,
    continuous_power_kw       REAL NOT NULL CHECK(continuous_power_kw > 0),
    peak_power_kw             REAL,
    max_charge_rate_kw        REAL,

    chemistry                 TEXT NOT NULL CHECK(chemistry IN ('LFP', 'NMC', 'NCA', 'Other')),
    ac_coupled                INTEGER NOT NULL,
    backup_type               TEXT NOT NULL CHECK(backup_type IN ('none', 'essential_circuits', 'whole_home')),
    scalable                  INTEGER NOT NULL,

    roundtrip_efficiency_pct  REAL,
    depth_of_discharge_pct    REAL,
    warranty_years            REAL,
    warranty_cycles           INTEGER,
    warranty_throughput_kwh   REAL,

    weight_kg                 REAL,
    indoor_rated              INTEGER NOT NULL,
    outdoor_rated             INTEGER NOT NULL,
    ip_rating                 TEXT,
    operating_temp_min_c      REAL,
    operating_temp_max_c      REAL,

    price_nl                  REAL,
    price_fr                  REAL,
    price_us                  REAL,
    price_note                TEXT,
    available_nl              INTEGER NOT NULL DEFAULT 0,
    available_fr              INTEGER NOT NULL DEFAULT 0,
    available_us              INTEGER NOT NULL DEFAULT 0,

    notes                     TEXT,
    created_at                TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at                TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

BRAND_COLUMNS = ("slug", "name", "country", "website_url", "logo_url", "description")

# Seeded battery columns; created_at/updated_at come from column defaults.
BATTERY_COLUMNS = (
    "slug", "brand_slug", "model", "manufacturer_sku", "status", "released_date",
    "image_url", "datasheet_url", "product_url",
    "usable_capacity_kwh", "total_capacity_kwh", "continuous_power_kw",
    "peak_power_kw", "max_charge_rate_kw",
    "chemistry", "ac_coupled", "backup_type", "scalable",
    "roundtrip_efficiency_pct", "depth_of_discharge_pct",
    "warranty_years", "warranty_cycles", "warranty_throughput_kwh",
    "weight_kg", "indoor_rated", "outdoor_rated", "ip_rating",
    "operating_temp_min_c", "operating_temp_max_c",
    "price_nl", "price_fr", "price_us", "price_note",
    "available_nl", "available_fr", "available_us",
    "notes",
)

# Columns whose CSV value is a literal "true"/"false"
BATTERY_BOOL_COLUMNS = (
    "ac_coupled", "scalable", "indoor_rated", "outdoor_rated",
    "available_nl", "available_fr", "available_us",
)

BATTERY_FLOAT_COLUMNS = (
    "usable_capacity_kwh", "total_capacity_kwh", "continuous_power_kw",
    "peak_power_kw", "max_charge_rate_kw",
    "roundtrip_efficiency_pct", "depth_of_discharge_pct",
    "warranty_years", "warranty_throughput_kwh",
    "weight_kg", "operating_temp_min_c", "operating_temp_max_c",
    "price_nl", "price_fr", "price_us",
)

BATTERY_INT_COLUMNS = ("warranty_cycles",)

# Required text columns are inserted verbatim (empty stays empty)
BATTERY_REQUIRED_TEXT_COLUMNS = ("slug", "brand_slug", "model", "status", "chemistry", "backup_type")
BRAND_REQUIRED_TEXT_COLUMNS = ("slug", "name")


def placeholders(columns) -> str:
    return ", ".join(f":{c}" for c in columns)


def insert_sql(table: str, columns) -> str:
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders(columns)})"
