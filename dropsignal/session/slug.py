from dataclasses import dataclass
from urllib.parse import urlsplit

from dropsignal.relay.config import DEFAULT_PORTS, DOWNLOAD_PATH_PREFIX


@dataclass(frozen=True)
class Origin:
    """Where download pages are served: ``protocol`` keeps its trailing colon."""

    protocol: str
    hostname: str
    port: str = ""

    @classmethod
    def from_url(cls, url: str) -> "Origin":
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f"Not an absolute URL: {url!r}")
        port = "" if parts.port is None else str(parts.port)
        return cls(protocol=f"{parts.scheme}:", hostname=parts.hostname, port=port)


def resolve_url(slug: str, origin: Origin) -> str:
    """
    Build the public download URL for ``slug``.

    The port is left out when it is empty or a default port (80 or 443), and
    written verbatim otherwise.
    """
    port = str(origin.port)
    host = origin.hostname
    if port and port not in DEFAULT_PORTS:
        host = f"{host}:{port}"
    return f"{origin.protocol}//{host}{DOWNLOAD_PATH_PREFIX}{slug}"
