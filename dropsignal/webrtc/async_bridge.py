import logging
from typing import (
    Any,
    AsyncContextManager,
)

from aiortc import (
    RTCConfiguration,
    RTCIceServer,
    RTCPeerConnection,
    RTCSessionDescription,
)
from trio_asyncio import (
    aio_as_trio,
    open_loop,
)

logger = logging.getLogger("dropsignal.webrtc.async_bridge")


class WebRTCAsyncBridge:
    """
    Async bridge for aiortc operations in trio context.

    aiortc runs on asyncio; entering the bridge opens a trio-asyncio loop so
    that peer connections can be driven from trio tasks.
    """

    def __init__(self, ice_servers: list[str] | None = None) -> None:
        self.ice_servers = list(ice_servers or [])
        self._loop_context: AsyncContextManager[Any] | None = None
        self._in_context = False

    async def __aenter__(self) -> "WebRTCAsyncBridge":
        if not self._in_context:
            self._loop_context = open_loop()
            await self._loop_context.__aenter__()
            self._in_context = True
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._in_context and self._loop_context is not None:
            await self._loop_context.__aexit__(exc_type, exc_val, exc_tb)
            self._in_context = False
            self._loop_context = None

    def rtc_configuration(self) -> RTCConfiguration:
        return RTCConfiguration(
            iceServers=[RTCIceServer(urls=url) for url in self.ice_servers]
        )

    def create_peer_connection(self) -> RTCPeerConnection:
        peer_connection = RTCPeerConnection(self.rtc_configuration())
        logger.debug("Created RTCPeerConnection")
        return peer_connection

    async def answer_offer(
        self, peer_connection: RTCPeerConnection, offer: RTCSessionDescription
    ) -> RTCSessionDescription:
        """
        Apply a remote offer and set the local answer.

        Returns the local description once ICE gathering has finished, so the
        answer carries its candidates.
        """
        await aio_as_trio(peer_connection.setRemoteDescription(offer))
        logger.debug("Set remote description from offer")
        answer = await aio_as_trio(peer_connection.createAnswer())
        await aio_as_trio(peer_connection.setLocalDescription(answer))
        logger.debug("Created and set local description (answer)")
        return peer_connection.localDescription

    async def close_peer_connection(self, peer_connection: RTCPeerConnection) -> None:
        try:
            await aio_as_trio(peer_connection.close())
            logger.debug("Closed peer connection")
        except RuntimeError as e:
            # The asyncio loop may already be gone during shutdown
            if "closed" in str(e).lower() or "no running event loop" in str(e).lower():
                logger.debug("Event loop closed during peer connection cleanup")
                return
            raise
