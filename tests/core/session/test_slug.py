"""
Tests for download URL derivation.
"""

import pytest

from dropsignal.session.slug import Origin, resolve_url


@pytest.mark.parametrize("port", ["80", "443"])
@pytest.mark.parametrize("protocol", ["http:", "https:"])
def test_default_ports_are_omitted(protocol, port):
    origin = Origin(protocol=protocol, hostname="example.com", port=port)
    assert resolve_url("ab12", origin) == f"{protocol}//example.com/download/ab12"


@pytest.mark.parametrize("port", ["8080", "3000", "8443", "1"])
def test_other_ports_are_kept(port):
    origin = Origin(protocol="http:", hostname="localhost", port=port)
    assert resolve_url("ab12", origin) == f"http://localhost:{port}/download/ab12"


def test_empty_port_is_omitted():
    origin = Origin(protocol="https:", hostname="example.com")
    assert resolve_url("ab12", origin) == "https://example.com/download/ab12"


def test_short_slug_on_https_origin():
    origin = Origin.from_url("https://example.com:443")
    assert resolve_url("ab12", origin) == "https://example.com/download/ab12"


def test_origin_from_url():
    assert Origin.from_url("http://localhost:8080") == Origin(
        protocol="http:", hostname="localhost", port="8080"
    )
    assert Origin.from_url("https://example.com/some/path") == Origin(
        protocol="https:", hostname="example.com", port=""
    )


def test_origin_from_relative_url():
    with pytest.raises(ValueError):
        Origin.from_url("/download/ab12")
