"""
Sender-side signaling for browser-to-browser file transfers.

A sender registers a session with a relay, keeps it alive, answers the
connection offers of receivers and tracks each resulting peer connection.
"""

from .connection import (
    ConnectionStateTracker,
    UploaderConnection,
    UploaderConnectionStatus,
)
from .exceptions import (
    DropSignalError,
    NegotiationError,
    StateError,
    TransportError,
    ValidationError,
)
from .relay import RelayClient
from .session import Origin, Session, SessionRegistry, resolve_url
from .signaling import OfferAnswerNegotiator, SignalingPoller, every
from .uploader import Uploader, UploadLinks

__all__ = [
    "ConnectionStateTracker",
    "DropSignalError",
    "NegotiationError",
    "OfferAnswerNegotiator",
    "Origin",
    "RelayClient",
    "Session",
    "SessionRegistry",
    "SignalingPoller",
    "StateError",
    "TransportError",
    "UploadLinks",
    "Uploader",
    "UploaderConnection",
    "UploaderConnectionStatus",
    "ValidationError",
    "every",
    "resolve_url",
]
