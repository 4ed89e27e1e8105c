"""Fetching playlist files from the web or from the local disk."""

from __future__ import annotations

import http.client
import shutil
import urllib.error
import urllib.request
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike

_CHUNK = 64 * 1024


class DownloadError(Exception):
    """Raised when a file cannot be downloaded from a URL."""


class ProxyMode(IntEnum):
    """Whether a proxy is configured by hand."""

    NONE = 0
    MANUAL = 1


@dataclass
class ProxySettings:
    """Proxy configuration used for downloads."""

    mode: ProxyMode = ProxyMode.NONE
    server: str = ""
    port: str = ""
    type: str = "http"
    use_auth: bool = False
    username: str = ""
    password: str = ""

    def to_string(self, protocol: bool, server: bool, auth: bool) -> str | None:
        """Build a proxy string from the selected parts, or None if none is selected."""
        proto_part = f"{self.type}://" if protocol else None
        server_part = f"{self.server}:{self.port}" if server else None
        auth_part = f"{self.username}:{self.password}" if auth else None

        if proto_part is None and server_part is None and auth_part is None:
            return None
        if server_part is not None and auth_part is not None:
            return f"{proto_part or ''}{auth_part}@{server_part}"
        return f"{proto_part or ''}{auth_part or ''}{server_part or ''}"


def _build_opener(proxy: ProxySettings | None) -> urllib.request.OpenerDirector:
    if proxy is not None and proxy.mode == ProxyMode.MANUAL:
        address = proxy.to_string(False, True, False)
        if proxy.use_auth:
            address = f"{proxy.to_string(False, False, True)}@{address}"
        proxy_url = f"http://{address}"
        handler = urllib.request.ProxyHandler({"http": proxy_url, "https": proxy_url})
        return urllib.request.build_opener(handler)
    return urllib.request.build_opener()


def _copy_stream(stream, out) -> None:
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        out.write(chunk)


def get_file(
    url: str,
    dst_file: str | PathLike,
    proxy: ProxySettings | None = None,
    timeout: int = 0,
) -> None:
    """Copy ``url`` to ``dst_file``.

    HTTP and HTTPS URLs are downloaded, following redirections, through the
    proxy when one is set by hand; a positive ``timeout`` limits the transfer
    in seconds. Anything else is taken as a local path and copied, replacing
    the destination.
    """
    scheme = url.split("//", 1)[0].lower()
    if scheme not in ("http:", "https:"):
        shutil.copyfile(url, dst_file)
        return

    opener = _build_opener(proxy)
    kwargs = {"timeout": timeout} if timeout > 0 else {}
    with open(dst_file, "wb") as out:
        try:
            with opener.open(url, **kwargs) as response:
                _copy_stream(response, out)
        except urllib.error.HTTPError as exc:
            # The server answered: its body is what gets stored.
            _copy_stream(exc, out)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            reason = getattr(exc, "reason", exc)
            raise DownloadError(
                f"Error when downloading the file from URL -> {url}.\n\n"
                f"The download has returned error:\n{reason}."
            ) from exc