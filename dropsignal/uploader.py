"""
Top-level coordinator of an upload: session, links, renewal and answers.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
import logging

import trio

from dropsignal.abc import IPeerConnection, IRelayClient
from dropsignal.connection.tracker import ConnectionStateTracker
from dropsignal.files import UploadedFile
from dropsignal.relay.config import DEFAULT_RENEW_INTERVAL
from dropsignal.session.registry import Session, SessionRegistry
from dropsignal.session.slug import Origin, resolve_url
from dropsignal.signaling.negotiator import OfferAnswerNegotiator
from dropsignal.signaling.poller import SignalingPoller

logger = logging.getLogger("dropsignal.uploader")


@dataclass(frozen=True)
class UploadLinks:
    session: Session
    long_url: str
    short_url: str


class Uploader:
    """
    Shares a set of files through the relay.

    Example::

        async with RelayClient.open(relay_url) as relay:
            uploader = Uploader(relay, Origin.from_url(relay_url), factory)
            async with uploader.run() as links:
                print(links.short_url)
                await trio.sleep_forever()

    """

    def __init__(
        self,
        relay: IRelayClient,
        origin: Origin,
        peer_factory: Callable[[], IPeerConnection],
        files: list[UploadedFile] | None = None,
        renew_interval: float = DEFAULT_RENEW_INTERVAL,
        upload_id: str | None = None,
    ) -> None:
        self.relay = relay
        self.origin = origin
        self.peer_factory = peer_factory
        self.files = list(files or [])
        self.renew_interval = renew_interval
        self.registry = SessionRegistry(relay, upload_id)
        self.tracker = ConnectionStateTracker()
        self.poller: SignalingPoller | None = None
        self.negotiator: OfferAnswerNegotiator | None = None
        self.links: UploadLinks | None = None

    @asynccontextmanager
    async def run(self) -> AsyncIterator[UploadLinks]:
        """
        Create the session and keep answering offers while the block runs.

        Session creation errors propagate to the caller. On exit renewal
        stops at once while negotiations already started run to completion,
        then every answered peer connection is closed.
        """
        session = await self.registry.create_session()
        self.links = UploadLinks(
            session=session,
            long_url=resolve_url(session.long_slug, self.origin),
            short_url=resolve_url(session.short_slug, self.origin),
        )
        self.negotiator = OfferAnswerNegotiator(
            self.relay,
            self.tracker,
            self.peer_factory,
            session.short_slug,
            total_files=len(self.files),
        )
        self.poller = SignalingPoller(self.relay, self.negotiator)

        try:
            async with trio.open_nursery() as negotiation_nursery:
                async with trio.open_nursery() as nursery:
                    self.poller.set_nursery(nursery, negotiation_nursery)
                    self.poller.start(session, self.renew_interval)
                    logger.info(
                        f"Sharing {len(self.files)} file(s) at {self.links.short_url}"
                    )
                    try:
                        yield self.links
                    finally:
                        self.poller.stop()
        finally:
            with trio.CancelScope(shield=True):
                await self.negotiator.aclose()
        logger.info("Upload stopped")
