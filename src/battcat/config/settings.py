import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

PACKAGE_ROOT = Path(__file__).resolve().parents[3]


def resolve_home(package_root: Path = PACKAGE_ROOT, cwd: Optional[Path] = None) -> Path:
    """Repo root for source checkouts and editable installs, else the working directory.

    A regular ``pip install`` puts the package under site-packages, where
    ``data/`` and ``logs/`` must not be created.
    """
    if (package_root / "pyproject.toml").exists():
        return package_root
    return cwd or Path.cwd()


def resolve_dir(name: str, default: Path, env: Optional[Mapping[str, str]] = None) -> Path:
    raw = (os.environ if env is None else env).get(name, "").strip()
    return Path(raw).expanduser() if raw else default


BASE_DIR = resolve_home()

load_dotenv(BASE_DIR / ".env")

DATA_DIR = resolve_dir("BATTCAT_DATA_DIR", BASE_DIR / "data")
LOG_DIR = resolve_dir("BATTCAT_LOG_DIR", BASE_DIR / "logs")

DB_FILE = DATA_DIR / "batteries.db"
BRANDS_SEED_FILE = DATA_DIR / "brands_seed.csv"
BATTERIES_SEED_FILE = DATA_DIR / "batteries_seed.csv"
FEEDS_FILE = DATA_DIR / "rss-feeds.json"
HISTORY_FILE = DATA_DIR / "scan_history.json"
REPORTS_DIR = DATA_DIR
LOG_FILE = LOG_DIR / "battcat.log"

API_KEY_ENV = "ANTHROPIC_API_KEY"
ORACLE_MODEL = os.getenv("BATTCAT_ORACLE_MODEL", "claude-haiku-4-5-20251001")
ORACLE_MAX_TOKENS = int(os.getenv("BATTCAT_ORACLE_MAX_TOKENS", "2048"))

FEED_TIMEOUT = float(os.getenv("BATTCAT_FEED_TIMEOUT", "20"))
FEED_WORKERS = int(os.getenv("BATTCAT_FEED_WORKERS", "8"))
