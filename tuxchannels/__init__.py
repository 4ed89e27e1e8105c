"""SQLite storage of IPTV channel groups, channels, TV channels and recordings."""

__version__ = "0.1.0"