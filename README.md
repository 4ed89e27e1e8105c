# tuxchannels

A library for keeping a local catalogue of IPTV channels in a single SQLite
database: channel groups (filled from a playlist or by the user as
favourites), the channels they contain, the known TV channels and their
alternative labels, and scheduled recordings. It also fetches playlist files
and reads a catalogue of known playlists.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `tuxchannels.database` – `DBSync(path=None)`, the connection to the
  database file, usable as a context manager (`open()`, `close()`,
  `exists()`). Without a path it uses `default_db_path()`, that is
  `FreetuxTV/freetuxtv.db` under `$XDG_CONFIG_HOME` or `~/.config`.
  `create_schema()` creates every table; `execute_script()` runs SQL
  statements; `get_current_db_version()` and `set_current_db_version()`
  read and record the schema version (the first version, `0.1.0.1`, is
  implied and never stored). `compare_db_version()` compares two
  `major.minor.revision.build` strings and returns -1, 0 or 1. Failures
  raise `DBSyncError`.
- `tuxchannels.infos` – the records kept in the database:
  `ChannelsGroupInfo` (with `ChannelsGroupType.PLAYLIST` or
  `ChannelsGroupType.FAVORITES`), `ChannelInfo` and `TvChannelInfo`.
- `tuxchannels.groups` – `ChannelsGroupRepository`: `select_all()`,
  `add()` (appended after the last group; sets id and position),
  `update()`, `update_last_update()`, `delete()` (later groups move up),
  `delete_channels()`, `switch_position()`, and the two steps of a playlist
  refresh, `start_update_channels()` and `end_update_channels()`, which
  together remove channels not refreshed in between.
- `tuxchannels.channels` – `ChannelRepository`: `select_of_group()`
  (also counts the channels in the group's `nb_channels`), `add()` (with
  `update=True`, a not-yet-refreshed channel of the group with the same URL
  is rewritten instead of adding a new one; a new channel is linked to a TV
  channel whose name or label its name starts with), `delete()`,
  `get_id_by_name()` (by channel name, then by TV channel name; -1 if
  none), `update_deinterlace_mode()` and `switch_position()`.
- `tuxchannels.tvchannels` – `TvChannelRepository`: `delete_all()` and
  `add()`, which stores the TV channel with its labels and links every
  channel whose name starts with the name or a label.
- `tuxchannels.recording` – `RecordingInfo` and `RecordingStatus`;
  `has_time()` and `is_time_greater()` compare a time with the recording's
  span.
- `tuxchannels.recordings_db` – `RecordingRepository`: `add()`,
  `select_all()` (ordered by begin date), `update()` (status and file
  name) and `delete()`. Times are seconds since the epoch, stored as local
  date and time to the minute.
- `tuxchannels.fileutils` – `get_file(url, dst_file, proxy=None,
  timeout=0)` downloads an HTTP(S) URL, following redirections and using a
  manual `ProxySettings` if given, or copies a local file. A failed download
  raises `DownloadError`. `ProxySettings.to_string()` builds a proxy string
  from the parts asked for.
- `tuxchannels.models` – `parse_channels_groups()` reads the catalogue XML
  into `LanguageEntry` objects holding `ChannelsGroupEntry` objects;
  `load_channels_groups(datadir, cache_dir=None)` reads the cached
  `freetuxtv/channels_groups.dat` if present, else
  `<datadir>/channels_groups.xml`.

## Example

```python
from tuxchannels.database import DBSync
from tuxchannels.groups import ChannelsGroupRepository
from tuxchannels.channels import ChannelRepository
from tuxchannels.infos import ChannelsGroupInfo, ChannelsGroupType, ChannelInfo

with DBSync("channels.db") as db:
    db.create_schema()
    groups = ChannelsGroupRepository(db)
    channels = ChannelRepository(db)

    favourites = ChannelsGroupInfo("Favourites", ChannelsGroupType.FAVORITES)
    groups.add(favourites)

    channel = ChannelInfo("News", "http://example.com/news.ts",
                          position=1, channels_group=favourites)
    channels.add(channel)

    for group in groups.select_all():
        print(group.position, group.name)
```

## What it does not do

The package stores and retrieves data only. It does not parse M3U
playlists into channels, play or record streams, show a channel list or
any other window, and has no command line.