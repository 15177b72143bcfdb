"""battcat — residential battery-storage catalog.

Public API surface — import submodules directly for full access:
  battcat.config.rules         — enums, sort keys, feed keywords
  battcat.config.settings      — paths, oracle settings
  battcat.storage.seed         — CSV seed pipeline
  battcat.storage.repository   — catalog read queries
  battcat.catalog.pricing      — display price / market availability
  battcat.catalog.ranking      — catalog sort
  battcat.scan.job             — news scan for untracked products
  battcat.app.cli              — CLI entry point
"""

from .catalog.pricing import resolve_price
from .catalog.ranking import sort_batteries
from .storage.repository import get_all_batteries
from .storage.seed import seed_database
from .config.rules import SORT_KEYS


def main():
    """CLI entry point."""
    from .app.main import main as _main
    return _main()


__all__ = [
    "resolve_price",
    "sort_batteries",
    "get_all_batteries",
    "seed_database",
    "SORT_KEYS",
    "main",
]
