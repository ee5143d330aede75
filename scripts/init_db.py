#!/usr/bin/env python
"""Create every table from the SQLAlchemy models in the `DATABASE_URL` database.

Usage:
  python scripts/init_db.py
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clubhouse.database import create_tables
from clubhouse.logging_config import configure_logging


def main():
    configure_logging()
    create_tables()
    print("✅ Tables created")


if __name__ == "__main__":
    main()
