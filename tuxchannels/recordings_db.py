"""Storage of recordings in the database."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any, Sequence

from tuxchannels.database import DBSync, DBSyncError
from tuxchannels.recording import RecordingInfo, RecordingStatus

SQLITE_FORMAT_DATETIME = "%Y-%m-%d %H:%M:%S"
SQLITE_FORMAT_DATETIME00 = "%Y-%m-%d %H:%M:00"


def _connection(dbsync: DBSync) -> sqlite3.Connection:
    if dbsync.connection is None:
        raise DBSyncError("The database is not open.")
    return dbsync.connection


def _execute(
    connection: sqlite3.Connection, query: str, params: Sequence[Any], message: str
) -> sqlite3.Cursor:
    try:
        return connection.execute(query, params)
    except sqlite3.Error as exc:
        raise DBSyncError(f"{message}\n\nSQLite has returned error:\n{exc}.") from exc


def _time_to_text(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime(SQLITE_FORMAT_DATETIME00)


def _text_to_time(text: str | None) -> int:
    if not text:
        return 0
    return int(datetime.strptime(text, SQLITE_FORMAT_DATETIME).timestamp())


class RecordingRepository:
    """Reads and writes recordings through an open ``DBSync``.

    Times are seconds since the epoch, stored as local date and time to
    the minute.
    """

    def __init__(self, dbsync: DBSync) -> None:
        self.dbsync = dbsync

    def add(self, recording: RecordingInfo) -> None:
        """Store ``recording`` without a file name and set its id."""
        channel_id = str(recording.channel_id) if recording.channel_id != -1 else None
        cursor = _execute(
            _connection(self.dbsync),
            "INSERT INTO recording "
            "(title, status, begin_date, end_date, filename, channel_id) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                recording.title,
                int(recording.status),
                _time_to_text(recording.begin_time),
                _time_to_text(recording.end_time),
                None,
                channel_id,
            ),
            f"Error when adding the recording '{recording.title}'.",
        )
        recording.id = cursor.lastrowid

    def select_all(self) -> list[RecordingInfo]:
        """Return every recording, ordered by begin date."""
        rows = _execute(
            _connection(self.dbsync),
            "SELECT id, title, status, begin_date, end_date, filename, channel_id "
            "FROM recording ORDER BY begin_date",
            (),
            "Error when displaying the channels.",
        ).fetchall()
        return [
            RecordingInfo(
                title=title,
                begin_time=_text_to_time(begin),
                end_time=_text_to_time(end),
                channel_id=int(channel_id) if channel_id is not None else -1,
                id=rec_id,
                status=RecordingStatus(status if status is not None else 0),
                filename=filename,
            )
            for rec_id, title, status, begin, end, filename, channel_id in rows
        ]

    def update(self, recording: RecordingInfo) -> None:
        """Store the status and file name of ``recording``."""
        _execute(
            _connection(self.dbsync),
            "UPDATE recording SET status=?, filename=? WHERE id=?",
            (int(recording.status), recording.filename, recording.id),
            "Error when updating the status of the recording "
            f'"{recording.title}".',
        )

    def delete(self, recording: RecordingInfo) -> None:
        """Remove ``recording``."""
        _execute(
            _connection(self.dbsync),
            "DELETE FROM recording WHERE id=?",
            (recording.id,),
            f'Error when deleting the recording "{recording.title}".',
        )