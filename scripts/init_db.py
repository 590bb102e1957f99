"""
Create the customers/addresses schema (idempotent).

Usage:
  python scripts/init_db.py

Uses DATABASE_URL (default sqlite:///customerApplication.db). Existing tables are
left as they are.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.addressbook.db import build_engine, ensure_schema  # noqa: E402


def init_schema(*, database_url: str | None = None) -> None:
    # Direct engine so this can run before the web app is imported.
    db_url = (database_url or os.environ.get("DATABASE_URL") or "sqlite:///customerApplication.db").strip()
    engine = build_engine(db_url)
    try:
        ensure_schema(engine)
    finally:
        engine.dispose()
    print(f"Schema ready ({engine.url.render_as_string(hide_password=True)}).", flush=True)


def main() -> None:
    load_dotenv()
    init_schema(database_url=None)


if __name__ == "__main__":
    main()
