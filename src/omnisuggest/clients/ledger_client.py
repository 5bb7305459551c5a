# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Async HTTP client for an external ledger service.

Satisfies ``ProtocolLedgerClient`` against a service exposing:

    POST /entries          {"content", "description"} -> receipt JSON
                           header Idempotency-Key: <key>
    GET  /entries/{id}     -> {"content": ...}

Every attempt of one ``commit`` call, retries included, sends the same
``Idempotency-Key`` header. The ledger service must deduplicate on it,
returning the original receipt for a repeated key, or a retry after a lost
response records the entry twice.

The client keeps a pooled httpx.AsyncClient, bounds every request with a
timeout and retries timeouts, connection errors and 5xx responses with
exponential backoff. Client errors (4xx) are never retried. Once retries
are exhausted the failure surfaces as ``RetryableError`` so that the
session orchestrator can keep the finalized suggestion for a later retry.

Example:
    ```python
    config = ModelLedgerClientConfig(base_url="http://localhost:8200")
    async with HttpLedgerClient(config) as ledger:
        receipt = await ledger.commit("print(1)", "Final Suggestion")
        content = await ledger.verify(receipt)
    ```
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import ValidationError

from omnisuggest.clients.ledger_memory import sha256_hex
from omnisuggest.exceptions import (
    LedgerClientError,
    LedgerNotFoundError,
    LedgerTamperError,
    RetryableError,
)
from omnisuggest.models import ModelLedgerClientConfig, ModelLedgerReceipt

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

# HTTP status code boundaries for error classification
_HTTP_CLIENT_ERROR_MIN = 400
_HTTP_CLIENT_ERROR_MAX = 500  # Exclusive (4xx range)
_HTTP_NOT_FOUND = 404

IDEMPOTENCY_HEADER = "Idempotency-Key"

_T = TypeVar("_T")


class HttpLedgerClient:
    """Ledger client backed by a remote ledger service.

    Supports both context manager and manual lifecycle management. An
    ``httpx.AsyncBaseTransport`` may be injected for testing.
    """

    def __init__(
        self,
        config: ModelLedgerClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def config(self) -> ModelLedgerClientConfig:
        return self._config

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def entries_url(self) -> str:
        """Full URL for the /entries collection."""
        return f"{self._config.base_url.rstrip('/')}/entries"

    async def connect(self) -> None:
        """Open the connection pool. Safe to call multiple times."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout_seconds),
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            transport=self._transport,
        )
        logger.debug("HttpLedgerClient connected to %s", self._config.base_url)

    async def close(self) -> None:
        """Close the connection pool. Safe to call multiple times."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.debug("HttpLedgerClient connection closed")

    async def __aenter__(self) -> HttpLedgerClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def commit(
        self,
        content: str,
        description: str,
        *,
        idempotency_key: str | None = None,
    ) -> ModelLedgerReceipt:
        """Append content to the remote ledger.

        Args:
            content: Content to commit.
            description: Entry description.
            idempotency_key: Sent as the ``Idempotency-Key`` header on every
                attempt; a fresh key is generated when omitted.

        Raises:
            LedgerClientError: On a 4xx response or a malformed receipt.
            LedgerTamperError: If the returned hash does not match the content.
            RetryableError: If the request still fails after all retries.
        """

        key = idempotency_key or uuid.uuid4().hex

        async def _post(client: httpx.AsyncClient) -> ModelLedgerReceipt:
            response = await client.post(
                self.entries_url,
                json={"content": content, "description": description},
                headers={IDEMPOTENCY_HEADER: key},
            )
            response.raise_for_status()
            return self._parse_receipt(response.json())

        receipt = await self._with_retries("commit", _post)
        if receipt.content_hash != sha256_hex(content):
            raise LedgerTamperError(
                f"Ledger returned hash {receipt.content_hash} for receipt "
                f"{receipt.receipt_id}, which does not match the committed content"
            )
        return receipt

    async def verify(self, receipt: ModelLedgerReceipt) -> str:
        """Fetch the committed content for a receipt.

        Raises:
            LedgerNotFoundError: If the service has no entry for the receipt.
            LedgerTamperError: If the stored content no longer matches the
                receipt's hash.
            LedgerClientError: On any other 4xx response.
            RetryableError: If the request still fails after all retries.
        """

        async def _get(client: httpx.AsyncClient) -> str:
            response = await client.get(f"{self.entries_url}/{receipt.receipt_id}")
            if response.status_code == _HTTP_NOT_FOUND:
                raise LedgerNotFoundError(
                    f"No ledger entry for receipt {receipt.receipt_id}"
                )
            response.raise_for_status()
            data = response.json()
            if not isinstance(data, dict) or not isinstance(data.get("content"), str):
                raise LedgerClientError(
                    f"Unexpected response format from ledger service: {type(data)}"
                )
            return data["content"]

        content = await self._with_retries("verify", _get)
        if sha256_hex(content) != receipt.content_hash:
            raise LedgerTamperError(
                f"Ledger content for receipt {receipt.receipt_id} does not match its hash"
            )
        return content

    async def health_check(self) -> bool:
        """Return True if the ledger service responds to GET /health."""
        if self._client is None:
            await self.connect()
        assert self._client is not None
        try:
            response = await self._client.get(
                f"{self._config.base_url.rstrip('/')}/health"
            )
        except httpx.HTTPError:
            return False
        return response.is_success

    async def _with_retries(
        self,
        operation: str,
        request: Callable[[httpx.AsyncClient], Awaitable[_T]],
    ) -> _T:
        """Run a request, retrying transient failures with exponential backoff."""
        if self._client is None:
            await self.connect()
        assert self._client is not None

        attempts = self._config.max_retries + 1
        last_error = ""

        for attempt in range(attempts):
            try:
                return await request(self._client)

            except httpx.TimeoutException as exc:
                last_error = f"timeout after {self._config.timeout_seconds}s: {exc}"
                logger.warning(
                    "Ledger %s timeout (attempt %d/%d): %s",
                    operation,
                    attempt + 1,
                    attempts,
                    exc,
                )

            except httpx.TransportError as exc:
                last_error = f"connection failed to {self._config.base_url}: {exc}"
                logger.warning(
                    "Ledger %s connection error (attempt %d/%d): %s",
                    operation,
                    attempt + 1,
                    attempts,
                    exc,
                )

            except httpx.HTTPStatusError as exc:
                # Do not retry on client errors (4xx)
                if (
                    _HTTP_CLIENT_ERROR_MIN
                    <= exc.response.status_code
                    < _HTTP_CLIENT_ERROR_MAX
                ):
                    raise LedgerClientError(
                        f"Ledger service client error: "
                        f"{exc.response.status_code} - {exc.response.text}"
                    ) from exc
                last_error = f"server error {exc.response.status_code}"
                logger.warning(
                    "Ledger %s server error (attempt %d/%d): %s",
                    operation,
                    attempt + 1,
                    attempts,
                    exc.response.status_code,
                )

            # Exponential backoff (skip on final attempt)
            if attempt < self._config.max_retries:
                delay = self._config.retry_base_delay * (2**attempt)
                logger.debug("Retrying in %.2fs...", delay)
                await asyncio.sleep(delay)

        raise RetryableError(
            f"Ledger {operation} failed after {attempts} attempts: {last_error}"
        )

    @staticmethod
    def _parse_receipt(data: Any) -> ModelLedgerReceipt:
        try:
            return ModelLedgerReceipt.model_validate(data)
        except ValidationError as exc:
            raise LedgerClientError(f"Malformed receipt from ledger service: {exc}") from exc


__all__ = ["IDEMPOTENCY_HEADER", "HttpLedgerClient"]
