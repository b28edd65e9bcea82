from collections.abc import Callable
from functools import partial
import logging
from typing import Any

import trio

from dropsignal.abc import IPeerConnection, IRelayClient
from dropsignal.connection.models import NegotiationResult, UploaderConnection
from dropsignal.connection.tracker import ConnectionStateTracker
from dropsignal.exceptions import NegotiationError, StateError, TransportError
from dropsignal.relay.messages import PendingOffer, SessionDescription

logger = logging.getLogger("dropsignal.signaling.negotiator")


class OfferAnswerNegotiator:
    """
    Answers receiver offers, one supervised task per offer.

    This class acts as the "answerer" of the handshake:
    1. Creates a fresh peer connection and answers the remote offer
    2. Registers for data channel and closure notifications
    3. Submits the answer to the relay

    Every attempt ends in a :class:`NegotiationResult` recorded with the
    tracker. Failures never propagate to the caller. An offer ID that was
    answered, or is being answered, is not negotiated again. Skipped
    redeliveries are returned to the caller but not recorded.
    """

    def __init__(
        self,
        relay: IRelayClient,
        tracker: ConnectionStateTracker,
        peer_factory: Callable[[], IPeerConnection],
        slug: str,
        total_files: int = 0,
    ) -> None:
        self.relay = relay
        self.tracker = tracker
        self.peer_factory = peer_factory
        self.slug = slug
        self.total_files = total_files
        self._seen_offers: set[str] = set()
        self.peers: dict[str, IPeerConnection] = {}

    def dispatch(self, nursery: trio.Nursery, offer: PendingOffer) -> None:
        """Negotiate ``offer`` as its own task in ``nursery``."""
        nursery.start_soon(
            self.negotiate,
            offer.offer_id,
            offer.description,
            name=f"negotiate-{offer.offer_id}",
        )

    async def negotiate(
        self, offer_id: str, description: SessionDescription
    ) -> NegotiationResult:
        if offer_id in self._seen_offers:
            logger.debug(f"Offer {offer_id} already handled, skipping")
            return NegotiationResult(offer_id, False, "duplicate offer")
        self._seen_offers.add(offer_id)

        peer: IPeerConnection | None = None
        try:
            peer = self.peer_factory()
            try:
                answer = await peer.create_answer(description)
            except NegotiationError:
                raise
            except Exception as e:
                raise NegotiationError(
                    f"Failed to create answer: {e}", offer_id=offer_id
                ) from e
            logger.debug(f"Created answer for offer {offer_id}")

            peer.on_data_channel(partial(self._on_data_channel, offer_id))
            peer.on_close(partial(self._on_close, offer_id))

            await self.relay.answer(self.slug, offer_id, answer)
        except (NegotiationError, TransportError) as e:
            logger.error(f"Negotiation for offer {offer_id} failed: {e}")
            result = NegotiationResult(offer_id, False, str(e))
        except Exception as e:
            logger.exception(f"Unexpected error negotiating offer {offer_id}")
            result = NegotiationResult(offer_id, False, f"{type(e).__name__}: {e}")
        else:
            self.peers[offer_id] = peer
            logger.info(f"Answered offer {offer_id}")
            result = NegotiationResult(offer_id, True)

        if not result.succeeded:
            # A redelivered offer gets a fresh attempt.
            self._seen_offers.discard(offer_id)
            if peer is not None:
                await self._close_peer(offer_id, peer)

        self.tracker.record_result(result)
        return result

    def _on_data_channel(self, offer_id: str, channel: Any) -> None:
        try:
            self.tracker.register(
                UploaderConnection(
                    peer_id=offer_id,
                    data_channel=channel,
                    total_files=self.total_files,
                )
            )
        except StateError as e:
            logger.warning(f"Ignoring data channel for offer {offer_id}: {e}")
            return
        logger.info(f"Data channel opened for offer {offer_id}")

    def _on_close(self, offer_id: str) -> None:
        self.peers.pop(offer_id, None)
        self.tracker.close(offer_id)

    async def _close_peer(self, offer_id: str, peer: IPeerConnection) -> None:
        try:
            await peer.close()
        except Exception as e:
            logger.debug(f"Error closing peer connection for {offer_id}: {e}")

    async def aclose(self) -> None:
        """Close every peer connection answered so far."""
        for offer_id, peer in list(self.peers.items()):
            await self._close_peer(offer_id, peer)
        self.peers.clear()
