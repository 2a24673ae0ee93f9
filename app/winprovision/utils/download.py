"""HTTP download helpers.

Downloads installers and queries release metadata with a fixed timeout.
"""

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Downloads are allowed to be slow but never unbounded
DOWNLOAD_TIMEOUT: float = 300.0

_USER_AGENT = "winprovision"
_CHUNK_SIZE = 256 * 1024


class DownloadError(Exception):
    """Raised when a URL cannot be fetched."""


def _request(url: str, accept: str | None = None) -> urllib.request.Request:
    headers = {"User-Agent": _USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return urllib.request.Request(url, headers=headers)


def download_file(url: str, destination: Path, *, timeout: float = DOWNLOAD_TIMEOUT) -> Path:
    """Download a URL to a local file.

    Args:
        url: URL to download.
        destination: Target file path. Parent directories are created.
        timeout: Socket timeout in seconds.

    Returns:
        The destination path.

    Raises:
        DownloadError: If the download fails for any network or I/O reason.
    """
    logger.info("Downloading %s -> %s", url, destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        with (
            urllib.request.urlopen(_request(url), timeout=timeout) as response,
            destination.open("wb") as handle,
        ):
            while True:
                chunk = response.read(_CHUNK_SIZE)
                if not chunk:
                    break
                handle.write(chunk)
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        msg = f"Failed to download {url}: {e}"
        raise DownloadError(msg) from e
    return destination


def fetch_json(url: str, *, timeout: float = 30.0) -> Any:
    """Fetch and decode a JSON document.

    Args:
        url: URL of the JSON resource.
        timeout: Socket timeout in seconds.

    Returns:
        Decoded JSON value.

    Raises:
        DownloadError: If the request fails or the body is not valid JSON.
    """
    logger.debug("Fetching JSON from %s", url)
    try:
        with urllib.request.urlopen(
            _request(url, accept="application/vnd.github+json"), timeout=timeout
        ) as response:
            return json.load(response)
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        msg = f"Failed to fetch {url}: {e}"
        raise DownloadError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON from {url}: {e}"
        raise DownloadError(msg) from e


def filename_from_url(url: str, default: str = "download.bin") -> str:
    """Return the last path segment of a URL, without query string."""
    name = url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    return name or default
