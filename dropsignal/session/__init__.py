from .registry import Session, SessionRegistry
from .slug import Origin, resolve_url

__all__ = [
    "Origin",
    "Session",
    "SessionRegistry",
    "resolve_url",
]
