from .models import NegotiationResult, PeerMetadata, UploaderConnection
from .status import (
    TERMINAL_STATES,
    TRANSITIONS,
    UploaderConnectionStatus,
    can_transition,
)
from .tracker import ConnectionStateTracker

__all__ = [
    "ConnectionStateTracker",
    "NegotiationResult",
    "PeerMetadata",
    "TERMINAL_STATES",
    "TRANSITIONS",
    "UploaderConnection",
    "UploaderConnectionStatus",
    "can_transition",
]
