"""Storage of channels in the database."""

from __future__ import annotations

import sqlite3
from typing import Any, Sequence

from tuxchannels.database import DBSync, DBSyncError
from tuxchannels.infos import ChannelInfo, ChannelsGroupInfo


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


def _group_of(channel: ChannelInfo) -> ChannelsGroupInfo:
    if channel.channels_group is None:
        raise ValueError(f'The channel "{channel.name}" belongs to no channels group.')
    return channel.channels_group


_INSERT_CHANNEL = """
INSERT INTO channel (name, position, uri, vlc_options, tvchannel_id, channelsgroup_id)
VALUES (?, ?, ?, ?, (
    SELECT tvchannel.id FROM tvchannel
    WHERE (? LIKE tvchannel.name || '%')
    OR tvchannel.id = (
        SELECT label_tvchannel.tvchannel_id FROM label_tvchannel
        WHERE (? LIKE label_tvchannel.label || '%')
        ORDER BY label_tvchannel.label DESC)
    ORDER BY tvchannel.name DESC), ?)
"""

_ID_BY_CHANNEL_NAME = """
SELECT channel.id FROM channels_group, channel
WHERE channels_group.id=channel.channelsgroup_id
AND channel.name=?
ORDER BY channels_group.position, channel.position
LIMIT 1
"""

_ID_BY_TVCHANNEL_NAME = """
SELECT channel.id FROM channels_group, channel, tvchannel
WHERE channels_group.id=channel.channelsgroup_id
AND channel.tvchannel_id=tvchannel.id
AND tvchannel.name=?
ORDER BY channels_group.position, channel.position
LIMIT 1
"""


class ChannelRepository:
    """Reads and writes channels through an open ``DBSync``."""

    def __init__(self, dbsync: DBSync) -> None:
        self.dbsync = dbsync

    def select_of_group(self, group: ChannelsGroupInfo) -> list[ChannelInfo]:
        """Return the channels of ``group`` by position, counting them in the group."""
        rows = _execute(
            _connection(self.dbsync),
            "SELECT channel.id, channel.name, channel.position, tvchannel.logo_filename, "
            "channel.uri, channel.vlc_options, channel.deinterlace_mode "
            "FROM channel LEFT JOIN tvchannel ON channel.tvchannel_id=tvchannel.id "
            "WHERE channel.channelsgroup_id=? ORDER BY channel.position",
            (group.id,),
            "Error when displaying the channels.",
        ).fetchall()
        channels = []
        for channel_id, name, position, logo, uri, vlc_options, deinterlace in rows:
            channel = ChannelInfo(
                name=name,
                url=uri,
                id=channel_id,
                position=position if position is not None else 0,
                logo_name=logo,
                vlc_options=vlc_options.split("\n") if vlc_options else None,
                deinterlace_mode=deinterlace,
                channels_group=group,
            )
            group.nb_channels += 1
            channels.append(channel)
        return channels

    def add(self, channel: ChannelInfo, update: bool = False) -> None:
        """Store ``channel`` in its group and set its id.

        With ``update``, a channel of the group with the same URL that has
        not yet been refreshed is rewritten instead of adding a new one.
        """
        connection = _connection(self.dbsync)
        group = _group_of(channel)
        vlc_options = "\n".join(channel.vlc_options) if channel.vlc_options else None

        existing_id = -1
        if update:
            row = _execute(
                connection,
                "SELECT id FROM channel WHERE uri=? AND channelsgroup_id=? AND updated=0 "
                "ORDER BY channel.position",
                (channel.url, group.id),
                "Error when getting the channel.",
            ).fetchone()
            if row is not None:
                existing_id = row[0]

        message = f'Error when adding the channel "{channel.name}".'
        if existing_id == -1:
            cursor = _execute(
                connection,
                _INSERT_CHANNEL,
                (
                    channel.name,
                    channel.position,
                    channel.url,
                    vlc_options,
                    channel.name,
                    channel.name,
                    group.id,
                ),
                message,
            )
            channel.id = cursor.lastrowid
        else:
            _execute(
                connection,
                "UPDATE channel SET name=?, position=?, vlc_options=?, updated=1 WHERE id=?",
                (channel.name, channel.position, vlc_options, existing_id),
                message,
            )
            channel.id = existing_id

    def delete(self, channel: ChannelInfo) -> None:
        """Remove ``channel`` and move the channels after it in its group up by one."""
        connection = _connection(self.dbsync)
        group = _group_of(channel)
        _execute(
            connection,
            "DELETE FROM channel WHERE id=?",
            (channel.id,),
            f'Error when deleting the channel "{channel.name}".',
        )
        _execute(
            connection,
            "UPDATE channel SET position=position-1 WHERE position>? AND channelsgroup_id=?",
            (channel.position, group.id),
            "Error when updating the position of the channels in group "
            f'"{group.name}".',
        )

    def get_id_by_name(self, name: str) -> int:
        """Find a channel by its own name, then by its TV channel's name; -1 if none."""
        connection = _connection(self.dbsync)
        message = "Error when getting the channel by name."
        for query in (_ID_BY_CHANNEL_NAME, _ID_BY_TVCHANNEL_NAME):
            row = _execute(connection, query, (name,), message).fetchone()
            if row is not None:
                return row[0]
        return -1

    def update_deinterlace_mode(self, channel: ChannelInfo, mode: str | None) -> None:
        """Store the deinterlace mode of ``channel`` and set it on the object."""
        _execute(
            _connection(self.dbsync),
            "UPDATE channel SET deinterlace_mode=? WHERE id=?",
            (mode, channel.id),
            f'Error when updating the channel "{channel.name}".',
        )
        channel.deinterlace_mode = mode

    def switch_position(self, channel_a: ChannelInfo, channel_b: ChannelInfo) -> None:
        """Exchange the positions of two channels, in the database and in the objects."""
        connection = _connection(self.dbsync)
        _execute(
            connection,
            "UPDATE channel SET position=? WHERE id=?",
            (channel_b.position, channel_a.id),
            f'Error when updating the channel "{channel_a.name}".',
        )
        old_position = channel_a.position
        channel_a.position = channel_b.position
        _execute(
            connection,
            "UPDATE channel SET position=? WHERE id=?",
            (old_position, channel_b.id),
            f'Error when updating the channel "{channel_b.name}".',
        )
        channel_b.position = old_position