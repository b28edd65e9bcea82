from collections.abc import Callable
from typing import Any

import pytest

from dropsignal.abc import IPeerConnection, IRelayClient
from dropsignal.connection.tracker import ConnectionStateTracker
from dropsignal.exceptions import NegotiationError, TransportError
from dropsignal.relay.messages import (
    CreateResponse,
    PendingOffer,
    RenewResponse,
    SessionDescription,
)
from dropsignal.tools.factories import ANSWER_SDP, SessionFactory

REJECT_MARKER = "a=reject"


class FakeRelay(IRelayClient):
    """In-memory relay recording every call."""

    def __init__(self) -> None:
        self.create_calls = 0
        self.renew_calls: list[tuple[str, str]] = []
        self.answers: list[tuple[str, str, SessionDescription]] = []
        self.pending: list[dict[str, SessionDescription]] = []
        self.fail_create = False
        self.fail_renew = False
        self.fail_answer_for: set[str] = set()

    def queue_offers(self, offers: dict[str, SessionDescription]) -> None:
        self.pending.append(offers)

    async def create(self) -> CreateResponse:
        self.create_calls += 1
        if self.fail_create:
            raise TransportError("Relay returned 503 for /api/create", status_code=503)
        return CreateResponse(
            secret="s1", long_slug="abcdef123456", short_slug="ab12"
        )

    async def renew(self, slug: str, secret: str) -> RenewResponse:
        self.renew_calls.append((slug, secret))
        if self.fail_renew:
            raise TransportError("Relay returned 500 for /api/renew", status_code=500)
        offers = self.pending.pop(0) if self.pending else {}
        return RenewResponse(
            offers=tuple(
                PendingOffer(offer_id, description)
                for offer_id, description in offers.items()
            )
        )

    async def answer(
        self, slug: str, offer_id: str, answer: SessionDescription
    ) -> dict[str, Any]:
        if offer_id in self.fail_answer_for:
            raise TransportError("Relay returned 404 for /api/answer", status_code=404)
        self.answers.append((slug, offer_id, answer))
        return {"success": True}


class FakePeerConnection(IPeerConnection):
    """Rejects offers whose SDP contains ``REJECT_MARKER``."""

    def __init__(self) -> None:
        self.offers: list[SessionDescription] = []
        self.channel_callbacks: list[Callable[[Any], None]] = []
        self.close_callbacks: list[Callable[[], Any]] = []
        self.closed = False

    async def create_answer(
        self, description: SessionDescription
    ) -> SessionDescription:
        self.offers.append(description)
        if REJECT_MARKER in description.sdp:
            raise NegotiationError("remote description rejected")
        return SessionDescription(sdp=ANSWER_SDP, type="answer")

    def on_data_channel(self, callback: Callable[[Any], None]) -> None:
        self.channel_callbacks.append(callback)

    def on_close(self, callback: Callable[[], Any]) -> None:
        self.close_callbacks.append(callback)

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.end()

    def open_channel(self, channel: Any) -> None:
        for callback in self.channel_callbacks:
            callback(channel)

    def end(self) -> None:
        for callback in self.close_callbacks:
            callback()


class PeerFactory:
    def __init__(self) -> None:
        self.created: list[FakePeerConnection] = []

    def __call__(self) -> FakePeerConnection:
        peer = FakePeerConnection()
        self.created.append(peer)
        return peer


@pytest.fixture
def relay():
    return FakeRelay()


@pytest.fixture
def peer_factory():
    return PeerFactory()


@pytest.fixture
def tracker():
    return ConnectionStateTracker()


@pytest.fixture
def session():
    return SessionFactory(secret="s1", long_slug="abcdef123456", short_slug="ab12")


@pytest.fixture
def rejected_description():
    return SessionDescription(sdp=f"v=0\r\n{REJECT_MARKER}\r\n", type="offer")
