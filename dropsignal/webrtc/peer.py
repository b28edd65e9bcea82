from collections.abc import Callable
import logging
from typing import Any

from aiortc import RTCDataChannel, RTCPeerConnection, RTCSessionDescription

from dropsignal.abc import IPeerConnection
from dropsignal.exceptions import NegotiationError
from dropsignal.relay.messages import SessionDescription

from .async_bridge import WebRTCAsyncBridge

logger = logging.getLogger("dropsignal.webrtc.peer")

CLOSED_CONNECTION_STATES = frozenset({"failed", "closed"})


class AiortcPeerConnection(IPeerConnection):
    """:class:`IPeerConnection` over one ``aiortc.RTCPeerConnection``."""

    def __init__(self, bridge: WebRTCAsyncBridge) -> None:
        self.bridge = bridge
        self.peer_connection: RTCPeerConnection = bridge.create_peer_connection()
        self._close_callbacks: list[Callable[[], Any]] = []
        self._closed = False
        self.peer_connection.on(
            "connectionstatechange", self._on_connection_state_change
        )

    async def create_answer(
        self, description: SessionDescription
    ) -> SessionDescription:
        offer = RTCSessionDescription(sdp=description.sdp, type=description.type)
        try:
            answer = await self.bridge.answer_offer(self.peer_connection, offer)
        except Exception as e:
            raise NegotiationError(f"aiortc could not answer offer: {e}") from e
        return SessionDescription(sdp=answer.sdp, type=answer.type)

    def on_data_channel(self, callback: Callable[[Any], None]) -> None:
        def on_channel(channel: RTCDataChannel) -> None:
            logger.debug(f"Received data channel: {channel.label}")
            callback(channel)

        self.peer_connection.on("datachannel", on_channel)

    def on_close(self, callback: Callable[[], Any]) -> None:
        self._close_callbacks.append(callback)

    async def close(self) -> None:
        await self.bridge.close_peer_connection(self.peer_connection)
        self._fire_close()

    def _on_connection_state_change(self) -> None:
        state = self.peer_connection.connectionState
        logger.debug(f"Connection state: {state}")
        if state in CLOSED_CONNECTION_STATES:
            self._fire_close()

    def _fire_close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for callback in self._close_callbacks:
            callback()


def aiortc_peer_factory(
    bridge: WebRTCAsyncBridge,
) -> Callable[[], AiortcPeerConnection]:
    """Return a factory creating one aiortc peer connection per offer."""

    def factory() -> AiortcPeerConnection:
        return AiortcPeerConnection(bridge)

    return factory
