CHEMISTRIES = ("LFP", "NMC", "NCA", "Other")
STATUSES = ("available", "discontinued", "upcoming")
BACKUP_TYPES = ("none", "essential_circuits", "whole_home")

# Semantic ordering, not alphabetical
BACKUP_ORDER = {
    "none": 0,
    "essential_circuits": 1,
    "whole_home": 2,
}

BACKUP_LABELS = {
    "none": "No backup",
    "essential_circuits": "Essential backup",
    "whole_home": "Whole-home backup",
}

SORT_KEYS = (
    "name",
    "chemistry",
    "usable_capacity_kwh",
    "continuous_power_kw",
    "backup_type",
    "warranty_years",
    "price",
    "released_date",
)
SORT_DIRECTIONS = ("asc", "desc")

DEFAULT_SORT_KEY = "usable_capacity_kwh"
DEFAULT_SORT_DIRECTION = "desc"

SORT_LABELS = {
    "name": "Battery",
    "chemistry": "Type",
    "usable_capacity_kwh": "Capacity",
    "continuous_power_kw": "Cont. power",
    "backup_type": "Backup",
    "warranty_years": "Warranty",
    "price": "Price",
    "released_date": "Released",
}

# (market tag, availability column)
MARKETS = (
    ("NL", "available_nl"),
    ("FR", "available_fr"),
    ("US", "available_us"),
)

# (price column, currency symbol), first non-null wins
PRICE_PREFERENCE = (
    ("price_us", "$"),
    ("price_nl", "€"),
)

MISSING_PLACEHOLDER = "—"

# Matched case-insensitively against title + summary before any oracle call
FEED_KEYWORDS = (
    "battery",
    "batteries",
    "ESS",
    "energy storage",
    "powerwall",
    "sonnen",
    "enphase",
    "BYD",
    "LG RESU",
    "home storage",
    "solar storage",
    "BESS",
    "stationary storage",
    "residential storage",
    "home battery",
)

DESCRIPTION_MAX_CHARS = 400
DEFAULT_LOOKBACK_DAYS = 7
