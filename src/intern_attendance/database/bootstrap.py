"""Apply the bundled schema and demo seed to a MySQL database.

Both SQL files are written to be re-runnable (``CREATE TABLE IF NOT EXISTS``,
``INSERT IGNORE``), so the app may apply them on every start.
"""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, Mapping

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent / "seed.sql"

# The target database comes from DB_CONFIG, never from the file.
_DB_SELECTION = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on ``;`` outside quoted strings; backslash escapes the next char."""
    start = 0
    quote = ""
    i = 0
    while i < len(sql):
        ch = sql[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def read_sql_statements(path: Path) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    text = _LINE_COMMENT.sub("", _DB_SELECTION.sub("", text))
    return list(iter_sql_statements(text))


def _run_statements(db_config: Mapping, statements: list[str]) -> None:
    factory = DatabaseConnection(DBConfig.from_mapping(db_config))
    with closing(factory.connect()) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()


def ensure_database_exists(db_config: Mapping) -> None:
    config = DBConfig.from_mapping(db_config)
    with closing(DatabaseConnection(config).connect(with_database=False)) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: Mapping, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    statements = read_sql_statements(Path(schema_path))
    _run_statements(db_config, statements)
    logger.info("Applied %d schema statement(s) from %s", len(statements), schema_path)


def apply_seed_sql(db_config: Mapping, *, seed_path: str | Path = SEED_PATH) -> None:
    statements = read_sql_statements(Path(seed_path))
    _run_statements(db_config, statements)
    logger.info("Applied %d seed statement(s) from %s", len(statements), seed_path)


def list_tables(db_config: Mapping) -> list[str]:
    with closing(DatabaseConnection(DBConfig.from_mapping(db_config)).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
