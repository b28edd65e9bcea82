"""
Renewal loop that keeps a relay session alive and collects pending offers.
"""

import logging

import trio

from dropsignal.abc import IRelayClient
from dropsignal.exceptions import TransportError
from dropsignal.relay.config import DEFAULT_RENEW_INTERVAL, MIN_RENEW_INTERVAL
from dropsignal.session.registry import Session

from .negotiator import OfferAnswerNegotiator
from .periodic import PeriodicHandle, every

logger = logging.getLogger("dropsignal.signaling.poller")


class SignalingPoller:
    """
    Renews a session on a fixed interval and hands every offer found in a
    renewal response to the negotiator.

    Renewal failures are logged and implicitly retried on the next tick; there
    is no backoff and no circuit breaker. Negotiations run in their own
    nursery so that stopping the poller leaves them running.
    """

    def __init__(
        self, relay: IRelayClient, negotiator: OfferAnswerNegotiator
    ) -> None:
        """
        Initialize signaling poller.

        Args:
            relay: Client for the relay's renew endpoint
            negotiator: Receives every pending offer

        """
        self.relay = relay
        self.negotiator = negotiator
        self.ticks = 0
        self.failures = 0
        self._handle: PeriodicHandle | None = None
        self._nursery: trio.Nursery | None = None
        self._negotiation_nursery: trio.Nursery | None = None

    def set_nursery(
        self,
        nursery: trio.Nursery,
        negotiation_nursery: trio.Nursery | None = None,
    ) -> None:
        """
        Set the nurseries for the renewal loop and for negotiations.

        Without a separate ``negotiation_nursery`` negotiations share the
        loop's nursery; they still outlive a cancelled loop.
        """
        self._nursery = nursery
        self._negotiation_nursery = negotiation_nursery or nursery

    def start(
        self, session: Session, interval: float = DEFAULT_RENEW_INTERVAL
    ) -> PeriodicHandle:
        """
        Start renewing ``session`` every ``interval`` seconds.

        Returns:
            Handle whose ``cancel()`` stops further renewals

        """
        if not session.secret or not session.short_slug:
            raise ValueError("Cannot poll a session without a secret and short slug")
        if interval < MIN_RENEW_INTERVAL:
            raise ValueError(
                f"Renew interval too short, minimum is {MIN_RENEW_INTERVAL}"
            )
        if self._nursery is None:
            raise RuntimeError("No nursery set for the poller")

        self.stop()

        async def renew_tick() -> None:
            await self.tick(session)

        self._handle = every(self._nursery, interval, renew_tick)
        logger.info(f"Renewing session '{session.short_slug}' every {interval}s")
        return self._handle

    def stop(self) -> None:
        if self._handle is not None and not self._handle.cancelled:
            self._handle.cancel()
            logger.info("Signaling poller stopped")
        self._handle = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None and not self._handle.cancelled

    async def tick(self, session: Session) -> int:
        """
        Run one renewal and dispatch its offers.

        Returns:
            Number of offers dispatched to the negotiator

        """
        self.ticks += 1
        try:
            response = await self.relay.renew(session.short_slug, session.secret)
        except TransportError as e:
            self.failures += 1
            logger.warning(
                f"Renewal of '{session.short_slug}' failed (tick {self.ticks}): {e}"
            )
            return 0

        if self._negotiation_nursery is None:
            raise RuntimeError("No nursery set for negotiations")
        for offer in response.offers:
            self.negotiator.dispatch(self._negotiation_nursery, offer)
        if response.offers:
            logger.debug(
                f"Tick {self.ticks}: dispatched {len(response.offers)} offer(s)"
            )
        return len(response.offers)
