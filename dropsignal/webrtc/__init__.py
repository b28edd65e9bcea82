"""
aiortc implementation of the peer-connection capability.
"""

from .async_bridge import WebRTCAsyncBridge
from .peer import AiortcPeerConnection, aiortc_peer_factory

__all__ = [
    "AiortcPeerConnection",
    "WebRTCAsyncBridge",
    "aiortc_peer_factory",
]
