import logging
import uuid
from dataclasses import dataclass, field

import trio

from dropsignal.abc import IRelayClient

logger = logging.getLogger("dropsignal.session.registry")


@dataclass(frozen=True)
class Session:
    """
    A transfer session registered at the relay.

    ``secret`` authorizes renewal for this session and is kept out of
    ``repr()`` so it cannot leak into logs or tracebacks.
    """

    upload_id: str
    secret: str = field(repr=False)
    long_slug: str
    short_slug: str


class SessionRegistry:
    """
    Creates the relay session for one upload attempt and caches it.

    Once a session exists every further :meth:`create_session` returns it
    without contacting the relay. Failures are not cached and not retried.
    """

    def __init__(self, relay: IRelayClient, upload_id: str | None = None) -> None:
        self.relay = relay
        self.upload_id = upload_id or uuid.uuid4().hex
        self._session: Session | None = None
        self._lock = trio.Lock()

    @property
    def session(self) -> Session | None:
        return self._session

    async def create_session(self) -> Session:
        """
        Return the session of this upload attempt, creating it on first use.

        Raises:
            TransportError: If the relay cannot create the session

        """
        async with self._lock:
            if self._session is not None:
                return self._session

            response = await self.relay.create()
            self._session = Session(
                upload_id=self.upload_id,
                secret=response.secret,
                long_slug=response.long_slug,
                short_slug=response.short_slug,
            )
            logger.info(
                f"Session for upload {self.upload_id} created "
                f"(short slug '{response.short_slug}')"
            )
            return self._session

    def reset(self, upload_id: str | None = None) -> None:
        """Forget the cached session so the next call starts a new upload attempt."""
        self._session = None
        self.upload_id = upload_id or uuid.uuid4().hex
