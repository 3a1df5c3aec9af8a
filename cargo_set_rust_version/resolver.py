import logging
import re

import requests
import tomlkit  # type: ignore
from tomlkit.exceptions import TOMLKitError  # type: ignore

from cargo_set_rust_version.errors import ResolutionError

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "stable"
DEFAULT_DIST_SERVER = "https://static.rust-lang.org"
DEFAULT_TIMEOUT = 30

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.\d+)?(?:-[0-9A-Za-z.-]+)?$")


def channel_url(channel: str, dist_server: str = DEFAULT_DIST_SERVER) -> str:
    return f"{dist_server.rstrip('/')}/dist/channel-rust-{channel}.toml"


def parse_channel_version(text: str) -> str:
    """Extract the ``major.minor`` rustc version from a channel manifest.

    The manifest carries ``pkg.rustc.version`` as e.g.
    ``"1.62.1 (e092d0b6b 2022-07-16)"``; only the leading release number is kept.
    """
    try:
        doc = tomlkit.parse(text)
        raw = doc["pkg"]["rustc"]["version"]
    except (KeyError, TypeError) as exc:
        # tomlkit's NonExistentKey is both a KeyError and a TOMLKitError
        raise ResolutionError("parsing channel info: missing pkg.rustc.version") from exc
    except TOMLKitError as exc:
        raise ResolutionError(f"parsing channel info: {exc}") from exc

    if not isinstance(raw, str) or not raw.strip():
        raise ResolutionError(f"parsing channel info: unexpected rustc version {raw!r}")

    release = raw.split()[0]
    match = _VERSION_RE.match(release)
    if match is None:
        raise ResolutionError(f"parsing channel info: unexpected rustc version {raw!r}")
    return f"{match.group(1)}.{match.group(2)}"


def resolve_latest_stable(
    channel: str = DEFAULT_CHANNEL,
    dist_server: str = DEFAULT_DIST_SERVER,
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> str:
    url = channel_url(channel, dist_server)
    logger.debug("fetching %s", url)
    http = session if session is not None else requests
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ResolutionError(f"making http request to {url}: {exc}") from exc

    version = parse_channel_version(response.text)
    logger.debug("channel %s resolved to %s", channel, version)
    return version
