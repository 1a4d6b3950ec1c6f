"""Backup the attendance database.

Note: Requires `mysqldump` on PATH. Without it, back up with MySQL Workbench
or another client instead.
"""

from __future__ import annotations

import importlib
import logging
import subprocess
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from intern_attendance.common.logging_config import configure_logging
from intern_attendance.config import get_settings_module

logger = logging.getLogger("backup")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    db = settings.DB_CONFIG

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{db['database']}_{ts}.sql"

    cmd = [
        "mysqldump",
        f"-h{db['host']}",
        f"-P{db.get('port', 3306)}",
        f"-u{db['user']}",
        f"-p{db['password']}",
        "--single-transaction",
        db["database"],
    ]

    try:
        with out_file.open("wb") as f:
            subprocess.run(cmd, stdout=f, stderr=subprocess.PIPE, check=True)
        logger.info("OK: Backup created: %s", out_file)
    except FileNotFoundError:
        raise SystemExit("`mysqldump` not found. Install the MySQL client tools or back up with Workbench.")


if __name__ == "__main__":
    main()
