"""
Client side of the relay's signaling surface.

The relay only brokers session descriptions: it issues sessions, keeps them
alive on renewal, and queues offers and answers between peers. File contents
never pass through it.
"""

from . import config
from .client import RelayClient
from .messages import (
    CreateResponse,
    PendingOffer,
    RenewResponse,
    SessionDescription,
    SessionDescriptionAnswer,
)

__all__ = [
    "RelayClient",
    "config",
    "CreateResponse",
    "PendingOffer",
    "RenewResponse",
    "SessionDescription",
    "SessionDescriptionAnswer",
]
