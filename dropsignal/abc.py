from abc import (
    ABC,
    abstractmethod,
)
from collections.abc import (
    Callable,
)
from typing import (
    TYPE_CHECKING,
    Any,
)

if TYPE_CHECKING:
    from dropsignal.relay.messages import (
        CreateResponse,
        RenewResponse,
        SessionDescription,
    )


class IRelayClient(ABC):
    """
    Interface for the relay's signaling surface.

    Every method raises ``TransportError`` when the relay is unreachable, answers
    with a non-success status, or returns a body that fails validation.
    """

    @abstractmethod
    async def create(self) -> "CreateResponse":
        """
        Create a session at the relay.

        :return: the secret and the two public slugs of the new session
        """

    @abstractmethod
    async def renew(self, slug: str, secret: str) -> "RenewResponse":
        """
        Keep a session alive and collect its pending offers.

        :param slug: the short slug of the session
        :param secret: the session's capability token
        :return: the offers waiting for an answer
        """

    @abstractmethod
    async def answer(
        self, slug: str, offer_id: str, answer: "SessionDescription"
    ) -> dict[str, Any]:
        """
        Submit the answer negotiated for one offer.

        :param slug: the short slug of the session
        :param offer_id: identifier of the offer being answered
        :param answer: the local session description
        :return: the relay's acknowledgement body
        """


class IPeerConnection(ABC):
    """
    Capability interface over a peer-connection primitive.

    Any transport able to answer a remote session description and to report
    data channels and closure satisfies it.
    """

    @abstractmethod
    async def create_answer(
        self, description: "SessionDescription"
    ) -> "SessionDescription":
        """
        Apply a remote offer and produce the local answer for it.

        :raises NegotiationError: if the primitive rejects the offer
        """

    @abstractmethod
    def on_data_channel(self, callback: Callable[[Any], None]) -> None:
        """Register ``callback`` to fire once per established data channel."""

    @abstractmethod
    def on_close(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` to fire when the peer connection ends."""

    @abstractmethod
    async def close(self) -> None:
        pass
