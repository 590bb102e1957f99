#!/usr/bin/env python3
"""
Production startup script.

1. Creates the schema if absent (init_db.py)
2. Starts gunicorn (replaces this process via os.execvp)

Usage:
    python scripts/start.py

A single sync worker is used: all requests share one process-wide engine, and
SQLite serializes writers anyway.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    # Step 0: Validate PORT environment variable
    port = os.environ.get("PORT", "").strip()
    if not port:
        print("PORT not set, using default 5000", flush=True)
        port = "5000"

    try:
        port_int = int(port)
        if port_int < 1 or port_int > 65535:
            raise ValueError("Port out of range")
    except ValueError:
        print(f"ERROR: Invalid PORT value '{port}'. Must be integer 1-65535.", flush=True)
        sys.exit(1)

    # Step 1: Schema (fatal on failure)
    print("=== Initializing database ===", flush=True)
    from scripts.init_db import init_schema
    try:
        init_schema()
    except Exception as e:
        print(f"DB Error: {e}", flush=True)
        sys.exit(1)

    # Step 2: Start gunicorn (exec replaces this process)
    print("=== Starting gunicorn ===", flush=True)
    print(f"Server Running at http://0.0.0.0:{port}/", flush=True)

    os.execvp(
        "gunicorn",
        [
            "gunicorn",
            "app.wsgi:app",
            "--bind", f"0.0.0.0:{port}",
            "--workers", "1",
            "--timeout", "60",
            "--preload",
            "--access-logfile", "-",
            "--error-logfile", "-",
        ],
    )


if __name__ == "__main__":
    main()
