"""
Relay client implementation.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import json
import logging
from typing import Any

import httpx
import trio

from dropsignal.abc import IRelayClient
from dropsignal.exceptions import TransportError, ValidationError

from .config import (
    ANSWER_ENDPOINT,
    CREATE_ENDPOINT,
    DEFAULT_TIMEOUT,
    RENEW_ENDPOINT,
)
from .messages import (
    CreateResponse,
    RenewResponse,
    SessionDescription,
    SessionDescriptionAnswer,
    parse_create_response,
    parse_renew_response,
)

logger = logging.getLogger("dropsignal.relay.client")


class RelayClient(IRelayClient):
    """
    HTTP client for the relay's create/renew/answer endpoints.

    The client borrows an ``httpx.AsyncClient`` whose ``base_url`` points at the
    relay. Use :meth:`open` to have one created and closed for you.
    """

    def __init__(self, http: httpx.AsyncClient, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize relay client.

        Args:
            http: HTTP client with ``base_url`` set to the relay origin
            timeout: Upper bound in seconds for a single relay call

        """
        self.http = http
        self.timeout = timeout

    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> AsyncIterator["RelayClient"]:
        """Create a client with its own connection pool for ``base_url``."""
        async with httpx.AsyncClient(
            base_url=base_url,
            http2=False,
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": "dropsignal"},
        ) as http:
            yield cls(http, timeout=timeout)

    async def create(self) -> CreateResponse:
        data = await self._post(CREATE_ENDPOINT)
        response = parse_create_response(data)
        logger.info(f"Created relay session with short slug '{response.short_slug}'")
        return response

    async def renew(self, slug: str, secret: str) -> RenewResponse:
        data = await self._post(RENEW_ENDPOINT, {"slug": slug, "secret": secret})
        response = parse_renew_response(data)
        logger.debug(f"Renewed '{slug}': {len(response.offers)} pending offer(s)")
        return response

    async def answer(
        self, slug: str, offer_id: str, answer: SessionDescription
    ) -> dict[str, Any]:
        body = SessionDescriptionAnswer(offer_id, answer).to_request(slug)
        data = await self._post(ANSWER_ENDPOINT, body)
        logger.debug(f"Submitted answer for offer '{offer_id}' on '{slug}'")
        return data if isinstance(data, dict) else {"ack": data}

    async def _post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """
        POST a JSON body to the relay and decode the JSON reply.

        Args:
            path: Endpoint path relative to the relay origin
            body: Request body, or None for an empty request

        Returns:
            The decoded response body

        """
        with trio.move_on_after(self.timeout) as cancel_scope:
            try:
                response = await self.http.post(path, json=body)
            except httpx.HTTPError as e:
                raise TransportError(f"Relay unreachable at {path}: {e}") from e

        if cancel_scope.cancelled_caught:
            raise TransportError(f"Relay timeout after {self.timeout}s at {path}")

        if not response.is_success:
            raise TransportError(
                f"Relay returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ValidationError(
                f"Relay returned a non-JSON body for {path}",
                status_code=response.status_code,
            ) from e
