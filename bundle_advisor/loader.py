"""Read a stats document from disk or over HTTP.

Usage:
    raw = load_stats("dist/stats.json")
    raw = load_stats("https://ci.example.com/artifacts/bundle-stats.json")
"""

import json
import warnings
from pathlib import Path
from typing import Any

import requests

LARGE_FILE_WARNING_THRESHOLD = 100 * 1024 * 1024


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class StatsLoadError(Exception):
    """Base exception for all stats loading errors."""


class StatsNotFoundError(StatsLoadError):
    """Raised when the file does not exist or the URL returns HTTP 404."""


class InvalidStatsError(StatsLoadError):
    """Raised when the document is not valid JSON."""


class NetworkError(StatsLoadError):
    """Raised on connection timeout or unreachable server."""


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------

def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_stats(source: str, timeout: int = 30) -> Any:
    """Return the JSON-decoded stats document found at *source*.

    Raises:
        StatsNotFoundError: missing file or HTTP 404
        InvalidStatsError:  content is not JSON
        NetworkError:       timeout or connection failure
        StatsLoadError:     any other read failure or non-2xx response
    """
    if is_url(source):
        return _fetch(source, timeout)
    return _read(source)


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

def _read(source: str) -> Any:
    path = Path(source)
    if not path.is_file():
        raise StatsNotFoundError(f"Stats file not found: '{source}'")

    size = path.stat().st_size
    if size > LARGE_FILE_WARNING_THRESHOLD:
        warnings.warn(
            f"Stats file '{source}' is {size // (1024 * 1024)} MB and will be parsed "
            "fully in memory. Consider emitting stats with fewer details.",
            UserWarning,
            stacklevel=3,
        )

    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise InvalidStatsError(f"'{source}' is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise StatsLoadError(f"Unable to read '{source}': {exc}") from exc


def _fetch(url: str, timeout: int) -> Any:
    try:
        response = requests.get(url, timeout=timeout)
    except requests.exceptions.Timeout as exc:
        raise NetworkError(
            f"Request timed out after {timeout}s while fetching '{url}'"
        ) from exc
    except requests.exceptions.ConnectionError as exc:
        raise NetworkError(f"Unable to reach '{url}'") from exc

    if response.status_code == 404:
        raise StatsNotFoundError(f"Stats document not found: {url}")
    if not response.ok:
        raise StatsLoadError(
            f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
        )

    try:
        return response.json()
    except ValueError as exc:
        raise InvalidStatsError(f"Response from {url} is not valid JSON") from exc
