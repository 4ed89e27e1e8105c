"""Storage of channels groups in the database."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from tuxchannels.database import DBSync, DBSyncError
from tuxchannels.infos import ChannelsGroupInfo


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


class ChannelsGroupRepository:
    """Reads and writes channels groups through an open ``DBSync``."""

    def __init__(self, dbsync: DBSync) -> None:
        self.dbsync = dbsync

    def select_all(self) -> list[ChannelsGroupInfo]:
        """Return every channels group, ordered by position."""
        rows = _execute(
            _connection(self.dbsync),
            "SELECT id, position, name, type, uri, bregex, eregex "
            "FROM channels_group ORDER BY position",
            (),
            "Error when displaying the channels.",
        ).fetchall()
        return [
            ChannelsGroupInfo(
                name=name,
                type=group_type,
                uri=uri,
                bregex=bregex,
                eregex=eregex,
                id=group_id,
                position=position if position is not None else 0,
            )
            for group_id, position, name, group_type, uri, bregex, eregex in rows
        ]

    def add(self, group: ChannelsGroupInfo) -> None:
        """Insert ``group`` after the last one; set its id and position."""
        connection = _connection(self.dbsync)
        message = f'Error when adding the group "{group.name}" in database.'
        cursor = _execute(
            connection,
            "INSERT INTO channels_group (position, name, type, uri, bregex, eregex) "
            "VALUES ((SELECT IFNULL(MAX(position), 0) + 1 FROM channels_group), "
            "?, ?, ?, ?, ?)",
            (group.name, int(group.type), group.uri, group.bregex, group.eregex),
            message,
        )
        group.id = cursor.lastrowid
        row = _execute(
            connection,
            "SELECT position FROM channels_group WHERE id=?",
            (group.id,),
            message,
        ).fetchone()
        if row is not None:
            group.position = row[0]

    def update(self, group: ChannelsGroupInfo) -> None:
        """Store the name, URI and regular expressions of ``group``."""
        _execute(
            _connection(self.dbsync),
            "UPDATE channels_group SET name=?, uri=?, bregex=?, eregex=? WHERE id=?",
            (group.name, group.uri, group.bregex, group.eregex, group.id),
            f'Error when updating the group "{group.name}".',
        )

    def update_last_update(self, group: ChannelsGroupInfo) -> None:
        """Set the last update date of ``group`` to the current local time."""
        _execute(
            _connection(self.dbsync),
            "UPDATE channels_group SET last_update=DATETIME('NOW', 'localtime') "
            "WHERE id=?",
            (group.id,),
            f'Error when updating the last update date of the group "{group.name}".',
        )

    def delete(self, group: ChannelsGroupInfo) -> None:
        """Remove ``group`` and move the groups after it up by one."""
        connection = _connection(self.dbsync)
        _execute(
            connection,
            "DELETE FROM channels_group WHERE id=?",
            (group.id,),
            f'Error when deleting the group "{group.name}".',
        )
        _execute(
            connection,
            "UPDATE channels_group SET position=position-1 WHERE position>?",
            (group.position,),
            "Error when updating the position of the groups.",
        )

    def delete_channels(self, group: ChannelsGroupInfo) -> None:
        """Remove every channel of ``group``."""
        _execute(
            _connection(self.dbsync),
            "DELETE FROM channel WHERE channelsgroup_id=?",
            (group.id,),
            f'Error when deleting the channels of the group "{group.name}".',
        )

    def start_update_channels(self, group: ChannelsGroupInfo) -> None:
        """Mark every channel of ``group`` as not yet refreshed."""
        _execute(
            _connection(self.dbsync),
            "UPDATE channel SET updated=0 WHERE channelsgroup_id=?",
            (group.id,),
            f'Error when updating the channels of the group "{group.name}".',
        )

    def end_update_channels(self, group: ChannelsGroupInfo) -> None:
        """Remove the channels of ``group`` that were not refreshed."""
        _execute(
            _connection(self.dbsync),
            "DELETE FROM channel WHERE channelsgroup_id=? AND updated=0",
            (group.id,),
            f'Error when updating the channels of the group "{group.name}".',
        )

    def switch_position(
        self, group_a: ChannelsGroupInfo, group_b: ChannelsGroupInfo
    ) -> None:
        """Exchange the positions of two groups, in the database and in the objects."""
        connection = _connection(self.dbsync)
        _execute(
            connection,
            "UPDATE channels_group SET position=? WHERE id=?",
            (group_b.position, group_a.id),
            f'Error when updating the group "{group_a.name}".',
        )
        old_position = group_a.position
        group_a.position = group_b.position
        _execute(
            connection,
            "UPDATE channels_group SET position=? WHERE id=?",
            (old_position, group_b.id),
            f'Error when updating the group "{group_b.name}".',
        )
        group_b.position = old_position