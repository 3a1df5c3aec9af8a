"""Tests for channel version resolution."""

from unittest.mock import Mock

import pytest
import requests

from cargo_set_rust_version.errors import ResolutionError
from cargo_set_rust_version.resolver import channel_url, parse_channel_version, resolve_latest_stable

CHANNEL_TOML = """\
manifest-version = "2"
date = "2022-07-19"

[pkg.rustc]
version = "1.62.1 (e092d0b6b 2022-07-16)"

[pkg.rustc.target.x86_64-unknown-linux-gnu]
available = true
"""


def _session(text=CHANNEL_TOML, status_error=None):
    response = Mock(text=text)
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    session = Mock()
    session.get.return_value = response
    return session


class TestParseChannelVersion:
    """Tests for reading pkg.rustc.version."""

    def test_major_minor_only(self):
        assert parse_channel_version(CHANNEL_TOML) == "1.62"

    def test_nightly_prerelease(self):
        text = '[pkg.rustc]\nversion = "1.66.0-nightly (0da281b60 2022-10-27)"\n'
        assert parse_channel_version(text) == "1.66"

    def test_missing_key(self):
        with pytest.raises(ResolutionError, match="pkg.rustc.version"):
            parse_channel_version('[pkg.cargo]\nversion = "0.63.1"\n')

    def test_invalid_toml(self):
        with pytest.raises(ResolutionError, match="parsing channel info"):
            parse_channel_version("<html>not found</html>")

    def test_duplicate_key(self):
        text = '[pkg.rustc]\nversion = "1.62.1"\nversion = "1.63.0"\n'
        with pytest.raises(ResolutionError, match="parsing channel info"):
            parse_channel_version(text)

    def test_garbage_version(self):
        with pytest.raises(ResolutionError):
            parse_channel_version('[pkg.rustc]\nversion = "unknown"\n')


class TestResolveLatestStable:
    """Tests for the HTTP lookup."""

    def test_fetches_channel_manifest(self):
        session = _session()
        assert resolve_latest_stable("stable", "https://example.org/", session=session) == "1.62"
        url = session.get.call_args.args[0]
        assert url == "https://example.org/dist/channel-rust-stable.toml"

    def test_concrete_release_channel(self):
        assert channel_url("1.62") == "https://static.rust-lang.org/dist/channel-rust-1.62.toml"

    def test_connection_error(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(ResolutionError, match="making http request"):
            resolve_latest_stable(session=session)

    def test_http_error_status(self):
        session = _session(status_error=requests.HTTPError("404 Client Error"))
        with pytest.raises(ResolutionError, match="404"):
            resolve_latest_stable("no-such-channel", session=session)
