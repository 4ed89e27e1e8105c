"""The catalogue of known channels groups, grouped by language."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from xml.parsers import expat


@dataclass
class ChannelsGroupEntry:
    """A channels group offered in the catalogue."""

    name: str | None = None
    uri: str | None = None
    required_isp: str | None = None
    bregex: str | None = None
    eregex: str | None = None


@dataclass
class LanguageEntry:
    """A language heading and the channels groups listed under it."""

    name: str | None = None
    groups: list[ChannelsGroupEntry] = field(default_factory=list)


_GROUP_ATTRS = {
    "name": "name",
    "uri": "uri",
    "required_isp": "required_isp",
    "bregex": "bregex",
    "eregex": "eregex",
}


def parse_channels_groups(xml_text: str | bytes) -> list[LanguageEntry]:
    """Parse the catalogue document into languages with their groups.

    Element and attribute names are matched without regard to case.
    Raises ValueError on malformed XML or on a channels group found
    before any language.
    """
    languages: list[LanguageEntry] = []

    def start(tag: str, attrs: dict[str, str]) -> None:
        tag = tag.lower()
        if tag == "language":
            lang = None
            for key, value in attrs.items():
                if key.lower() == "lang":
                    lang = value
            languages.append(LanguageEntry(lang))
        elif tag == "channels_group":
            if not languages:
                raise ValueError("channels_group element found outside of a language")
            entry = ChannelsGroupEntry()
            for key, value in attrs.items():
                attr = _GROUP_ATTRS.get(key.lower())
                if attr is not None:
                    setattr(entry, attr, value)
            languages[-1].groups.append(entry)

    parser = expat.ParserCreate()
    parser.StartElementHandler = start
    try:
        parser.Parse(xml_text, True)
    except expat.ExpatError as exc:
        raise ValueError(f"Invalid channels groups file: {exc}") from exc
    return languages


def _user_cache_dir() -> Path:
    cache = os.environ.get("XDG_CACHE_HOME")
    if cache:
        return Path(cache)
    return Path.home() / ".cache"


def load_channels_groups(
    datadir: str | PathLike, cache_dir: str | PathLike | None = None
) -> list[LanguageEntry]:
    """Load the catalogue, preferring the cached copy over the shipped one.

    The cached copy is ``<cache_dir>/freetuxtv/channels_groups.dat``; the
    shipped one is ``<datadir>/channels_groups.xml``. ``cache_dir`` defaults
    to the user's cache directory.
    """
    base = Path(cache_dir) if cache_dir is not None else _user_cache_dir()
    path = base / "freetuxtv" / "channels_groups.dat"
    if not path.exists():
        path = Path(datadir) / "channels_groups.xml"
    return parse_channels_groups(path.read_bytes())