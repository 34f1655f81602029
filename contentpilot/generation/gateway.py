"""AI gateway client for chat completions.

Sends one system + user conversation to an OpenAI-compatible
``/chat/completions`` endpoint and returns the first choice's message text.

There is no retry or circuit breaking here: a single failure is surfaced to
the caller as a typed UpstreamError.
"""

import asyncio
from typing import Any, Optional

import httpx
import structlog

from contentpilot.config.settings import Settings
from contentpilot.core.exceptions import (
    ConfigError,
    ParseError,
    QuotaExceededError,
    RateLimitedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from contentpilot.monitoring.metrics import track_upstream_call

logger = structlog.get_logger(__name__)

# Upstream bodies can be large HTML error pages; only log the start
ERROR_BODY_LOG_LIMIT = 500


class AIGatewayClient:
    """Async client for the AI gateway.

    Example:
        async with AIGatewayClient(settings) as gateway:
            text = await gateway.complete(system_prompt, user_prompt)
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            settings: Application settings holding the key, URL, model and timeout.
            transport: Optional httpx transport, used by tests to stub the gateway.

        Raises:
            ConfigError: If no gateway key is configured.
        """
        if not settings.has_gateway_credentials:
            raise ConfigError(
                "AI_GATEWAY_API_KEY is not configured",
                config_key="ai_gateway_api_key",
            )

        self._api_key = settings.ai_gateway_api_key.get_secret_value()
        self._base_url = settings.ai_gateway_url.rstrip("/")
        self._model = settings.ai_model
        self._timeout = settings.ai_request_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def model(self) -> str:
        return self._model

    async def __aenter__(self) -> "AIGatewayClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout),
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_payload(self, system_prompt: str, user_prompt: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Request a completion and return the message text.

        Args:
            system_prompt: Persona and tone instructions.
            user_prompt: The rendered request template.

        Returns:
            Content of the first choice's message.

        Raises:
            RateLimitedError: Gateway returned 429.
            QuotaExceededError: Gateway returned 402.
            UpstreamTimeoutError: No response within the configured timeout.
            UpstreamError: Any other non-2xx status or a transport failure.
            ParseError: The success envelope had no message content.
        """
        client = await self._ensure_client()
        payload = self._build_payload(system_prompt, user_prompt)

        with track_upstream_call() as ctx:
            try:
                response = await asyncio.wait_for(
                    client.post("/chat/completions", json=payload),
                    timeout=self._timeout,
                )
            except (asyncio.TimeoutError, httpx.TimeoutException) as e:
                ctx["outcome"] = "timeout"
                logger.error("ai_gateway_timeout", timeout_seconds=self._timeout)
                raise UpstreamTimeoutError(self._timeout) from e
            except httpx.RequestError as e:
                ctx["outcome"] = "transport_error"
                logger.error("ai_gateway_request_error", error=str(e))
                raise UpstreamError(
                    f"AI gateway request failed: {e}",
                    details={"original_error": type(e).__name__},
                ) from e

            ctx["outcome"] = str(response.status_code)

        if response.status_code == 429:
            logger.warning("ai_gateway_rate_limited")
            raise RateLimitedError()
        if response.status_code == 402:
            logger.warning("ai_gateway_quota_exceeded")
            raise QuotaExceededError()
        if not response.is_success:
            logger.error(
                "ai_gateway_error",
                status_code=response.status_code,
                body=response.text[:ERROR_BODY_LOG_LIMIT],
            )
            raise UpstreamError(
                f"AI gateway error: {response.status_code}",
                status_code=response.status_code,
            )

        return self._extract_content(response)

    def _extract_content(self, response: httpx.Response) -> str:
        """Pull choices[0].message.content out of a success envelope."""
        try:
            envelope = response.json()
        except ValueError as e:
            raise ParseError(
                "AI gateway returned a non-JSON envelope",
                raw_length=len(response.content),
            ) from e

        try:
            content = envelope["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not isinstance(content, str):
            logger.error("ai_gateway_missing_content", raw_length=len(response.content))
            raise ParseError(
                "AI gateway response contained no message content",
                raw_length=len(response.content),
            )
        return content
