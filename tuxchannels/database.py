"""Access to the application's SQLite database."""

from __future__ import annotations

import logging
import os
import re
import sqlite3
from os import PathLike
from pathlib import Path

log = logging.getLogger(__name__)

FIRST_DB_VERSION = "0.1.0.1"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS config (
    id INTEGER PRIMARY KEY,
    dbversion TEXT
);
CREATE TABLE IF NOT EXISTS tvchannel (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    logo_filename TEXT
);
CREATE TABLE IF NOT EXISTS label_tvchannel (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    label TEXT NOT NULL,
    tvchannel_id INTEGER
);
CREATE TABLE IF NOT EXISTS channels_group (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    position INTEGER,
    name TEXT NOT NULL,
    type INTEGER NOT NULL DEFAULT 0,
    uri TEXT,
    bregex TEXT,
    eregex TEXT,
    last_update TEXT
);
CREATE TABLE IF NOT EXISTS channel (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    position INTEGER,
    uri TEXT,
    vlc_options TEXT,
    deinterlace_mode TEXT,
    updated INTEGER NOT NULL DEFAULT 1,
    channelsgroup_id INTEGER,
    tvchannel_id INTEGER
);
CREATE TABLE IF NOT EXISTS recording (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    status INTEGER NOT NULL DEFAULT 0,
    begin_date TEXT,
    end_date TEXT,
    filename TEXT,
    channel_id INTEGER
);
"""


class DBSyncError(Exception):
    """Raised when the database cannot be opened or a query fails."""


def _user_config_dir() -> Path:
    config = os.environ.get("XDG_CONFIG_HOME")
    if config:
        return Path(config)
    return Path.home() / ".config"


def default_db_path() -> Path:
    """Return the location of the user's database file."""
    return _user_config_dir() / "FreetuxTV" / "freetuxtv.db"


def _version_parts(version: str) -> list[int]:
    parts = []
    for piece in version.split(".")[:4]:
        match = re.match(r"\s*[+-]?\d+", piece)
        if match is None:
            break
        parts.append(int(match.group()))
    return parts + [0] * (4 - len(parts))


def compare_db_version(version1: str, version2: str) -> int:
    """Compare two ``major.minor.revision.build`` versions: -1, 0 or 1."""
    first = _version_parts(version1)
    second = _version_parts(version2)
    return (first > second) - (first < second)


class DBSync:
    """A connection to the database file, usable as a context manager."""

    def __init__(self, path: str | PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else default_db_path()
        self.connection: sqlite3.Connection | None = None

    def open(self) -> None:
        """Open the database, creating its directory if needed."""
        directory = self.path.parent
        if not directory.exists():
            try:
                directory.mkdir(parents=True, mode=0o744)
                log.info("Directory created: %s", directory)
            except OSError:
                log.critical("Cannot create directory: %s", directory)

        log.info("DBSync open database")
        try:
            self.connection = sqlite3.connect(str(self.path), isolation_level=None)
        except sqlite3.Error as exc:
            raise DBSyncError(
                f"Cannot open database.\n\nSQLite has returned error:\n{exc}."
            ) from exc

    def close(self) -> None:
        """Close the database if it is open."""
        if self.connection is None:
            return
        log.info("DBSync close database")
        self.connection.close()
        self.connection = None

    def __enter__(self) -> DBSync:
        self.open()
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def exists(self) -> bool:
        """Tell whether the database file is present."""
        return self.path.is_file()

    def _require(self) -> sqlite3.Connection:
        if self.connection is None:
            raise DBSyncError("The database is not open.")
        return self.connection

    def create_schema(self) -> None:
        """Create every table of a fresh database and record its version."""
        self.execute_script(_SCHEMA)
        self.set_current_db_version(FIRST_DB_VERSION)

    def execute_script(self, query: str) -> None:
        """Run one or more SQL statements."""
        connection = self._require()
        try:
            connection.executescript(query)
        except sqlite3.Error as exc:
            raise DBSyncError(
                f"Error when migrating the database.\n\nSQLite has returned error:\n{exc}."
            ) from exc

    def get_current_db_version(self) -> str:
        """Return the version recorded in the database, or the first version."""
        connection = self._require()
        try:
            row = connection.execute(
                "SELECT dbversion FROM config WHERE id=1"
            ).fetchone()
        except sqlite3.OperationalError:
            return FIRST_DB_VERSION
        except sqlite3.Error as exc:
            raise DBSyncError(
                "Error when getting the database version.\n\n"
                f"SQLite has returned error:\n{exc}."
            ) from exc
        if row is None:
            return FIRST_DB_VERSION
        return row[0]

    def set_current_db_version(self, version: str) -> None:
        """Record ``version``; the first version is implied and not stored."""
        if compare_db_version(version, FIRST_DB_VERSION) == 0:
            return
        connection = self._require()
        try:
            connection.execute(
                "REPLACE INTO config (id, dbversion) VALUES (1, ?)", (version,)
            )
        except sqlite3.Error as exc:
            raise DBSyncError(
                "Error when updating the database version.\n\n"
                f"SQLite has returned error:\n{exc}."
            ) from exc