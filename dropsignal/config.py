"""
Configuration for running an uploader.
"""

from dataclasses import (
    dataclass,
    field,
)

from dropsignal.relay.config import (
    DEFAULT_RENEW_INTERVAL,
    DEFAULT_TIMEOUT,
    MIN_RENEW_INTERVAL,
)


@dataclass
class UploaderConfig:
    """Settings of one uploader run."""

    relay_url: str
    """Origin of the relay service, e.g. ``https://relay.example.com``."""

    public_origin: str | None = None
    """Origin download URLs are built on. Defaults to ``relay_url``."""

    renew_interval: float = DEFAULT_RENEW_INTERVAL
    """Seconds between renewal calls."""

    timeout: float = DEFAULT_TIMEOUT
    """Upper bound in seconds for a single relay call."""

    ice_servers: list[str] = field(
        default_factory=lambda: ["stun:stun.l.google.com:19302"]
    )
    """STUN/TURN URLs handed to every peer connection."""

    def __post_init__(self) -> None:
        if self.renew_interval < MIN_RENEW_INTERVAL:
            raise ValueError(f"renew_interval must be at least {MIN_RENEW_INTERVAL}")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @property
    def origin_url(self) -> str:
        return self.public_origin or self.relay_url
