"""Storage of TV channels and their alternative labels in the database."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from tuxchannels.database import DBSync, DBSyncError
from tuxchannels.infos import TvChannelInfo


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


class TvChannelRepository:
    """Reads and writes TV channels through an open ``DBSync``."""

    def __init__(self, dbsync: DBSync) -> None:
        self.dbsync = dbsync

    def delete_all(self) -> None:
        """Remove every TV channel."""
        _execute(
            _connection(self.dbsync),
            "DELETE FROM tvchannel",
            (),
            "Error when deleting the tv channels list.",
        )

    def add(self, tv_channel: TvChannelInfo) -> None:
        """Store ``tv_channel`` with its labels, set its id and link matching channels.

        Channels whose name starts with the TV channel's name, or with one of
        its labels, are linked to it.
        """
        connection = _connection(self.dbsync)
        cursor = _execute(
            connection,
            "INSERT INTO tvchannel (name, logo_filename) VALUES (?, ?)",
            (tv_channel.name, tv_channel.logo_filename),
            f"Error when adding the tv channel '{tv_channel.name}'.",
        )
        tv_channel.id = cursor.lastrowid
        self._link_channels(connection, tv_channel.name, tv_channel.id)
        for label in tv_channel.labels:
            self._add_label(connection, label, tv_channel.id)

    def _add_label(
        self, connection: sqlite3.Connection, label: str, tv_channel_id: int
    ) -> None:
        _execute(
            connection,
            "INSERT INTO label_tvchannel (label, tvchannel_id) VALUES (?, ?)",
            (label, tv_channel_id),
            f"Error when adding the label of channel logo '{label}'.",
        )
        self._link_channels(connection, label, tv_channel_id)

    @staticmethod
    def _link_channels(
        connection: sqlite3.Connection, label: str, tv_channel_id: int
    ) -> None:
        _execute(
            connection,
            "UPDATE channel SET tvchannel_id=? WHERE name LIKE ? || '%'",
            (tv_channel_id, label),
            f"Error when linking the TV channel '{label}' to channel.",
        )