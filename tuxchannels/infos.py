"""Descriptions of channels groups, channels and TV channels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class ChannelsGroupType(IntEnum):
    """Kind of channels group: filled from a playlist, or by the user."""

    PLAYLIST = 0
    FAVORITES = 1


@dataclass
class ChannelsGroupInfo:
    """A group of channels as stored in the database."""

    name: str
    type: ChannelsGroupType = ChannelsGroupType.PLAYLIST
    uri: str | None = None
    bregex: str | None = None
    eregex: str | None = None
    id: int = -1
    position: int = 0
    nb_channels: int = 0

    def __post_init__(self) -> None:
        self.type = ChannelsGroupType(self.type)


@dataclass
class ChannelInfo:
    """A channel that can be played, belonging to a channels group."""

    name: str
    url: str
    id: int = -1
    position: int = 0
    logo_name: str | None = None
    vlc_options: list[str] | None = None
    deinterlace_mode: str | None = None
    channels_group: ChannelsGroupInfo | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.vlc_options is not None:
            self.vlc_options = list(self.vlc_options)


@dataclass
class TvChannelInfo:
    """A known TV channel, with its logo and the labels it goes by."""

    name: str
    logo_filename: str | None = None
    labels: list[str] = field(default_factory=list)
    id: int = -1

    def __post_init__(self) -> None:
        self.labels = list(self.labels)