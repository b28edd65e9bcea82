from .negotiator import OfferAnswerNegotiator
from .periodic import PeriodicHandle, every
from .poller import SignalingPoller

__all__ = [
    "OfferAnswerNegotiator",
    "PeriodicHandle",
    "SignalingPoller",
    "every",
]
