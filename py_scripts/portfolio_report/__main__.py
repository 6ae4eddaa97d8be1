"""Module entry point for python -m py_scripts.portfolio_report."""

import sys

from .daily_pipeline import main

if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
