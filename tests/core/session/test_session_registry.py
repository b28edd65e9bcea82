"""
Tests for session creation and caching.
"""

import pytest
import trio

from dropsignal.exceptions import TransportError
from dropsignal.session.registry import Session, SessionRegistry


@pytest.mark.trio
async def test_create_session(relay):
    registry = SessionRegistry(relay, upload_id="upload-1")
    session = await registry.create_session()

    assert session == Session(
        upload_id="upload-1",
        secret="s1",
        long_slug="abcdef123456",
        short_slug="ab12",
    )
    assert registry.session is session


@pytest.mark.trio
async def test_session_is_cached(relay):
    registry = SessionRegistry(relay)
    first = await registry.create_session()
    second = await registry.create_session()

    assert first is second
    assert relay.create_calls == 1


@pytest.mark.trio
async def test_concurrent_calls_share_one_relay_call(relay):
    registry = SessionRegistry(relay)
    sessions = []

    async def create():
        sessions.append(await registry.create_session())

    async with trio.open_nursery() as nursery:
        for _ in range(3):
            nursery.start_soon(create)

    assert relay.create_calls == 1
    assert len({id(s) for s in sessions}) == 1


@pytest.mark.trio
async def test_failure_surfaces_and_is_not_cached(relay):
    registry = SessionRegistry(relay)
    relay.fail_create = True
    with pytest.raises(TransportError):
        await registry.create_session()
    assert registry.session is None
    assert relay.create_calls == 1

    relay.fail_create = False
    session = await registry.create_session()
    assert session.short_slug == "ab12"
    assert relay.create_calls == 2


@pytest.mark.trio
async def test_reset_starts_new_upload_attempt(relay):
    registry = SessionRegistry(relay, upload_id="upload-1")
    await registry.create_session()
    registry.reset(upload_id="upload-2")

    assert registry.session is None
    session = await registry.create_session()
    assert session.upload_id == "upload-2"
    assert relay.create_calls == 2


def test_secret_not_in_repr():
    session = Session(
        upload_id="u", secret="top-secret", long_slug="abcdef123456", short_slug="ab12"
    )
    assert "top-secret" not in repr(session)
