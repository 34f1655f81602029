"""Unit tests for the AI gateway client."""

import asyncio
import json

import httpx
import pytest

from contentpilot.config.settings import Settings
from contentpilot.core.exceptions import (
    ConfigError,
    ParseError,
    QuotaExceededError,
    RateLimitedError,
    RetryableError,
    UpstreamError,
    UpstreamTimeoutError,
)
from contentpilot.generation.gateway import AIGatewayClient


class TestGatewayConfiguration:
    """Tests for construction-time validation."""

    def test_missing_key_raises_config_error(self, unconfigured_settings):
        with pytest.raises(ConfigError) as exc_info:
            AIGatewayClient(unconfigured_settings)

        assert exc_info.value.config_key == "ai_gateway_api_key"

    def test_blank_key_raises_config_error(self):
        with pytest.raises(ConfigError):
            AIGatewayClient(Settings(_env_file=None, ai_gateway_api_key="   "))


class TestGatewayRequests:
    """Tests for the outbound request shape and response handling."""

    @pytest.mark.asyncio
    async def test_sends_bearer_model_and_two_messages(self, make_gateway, chat_completion):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=chat_completion('{"ok": true}'))

        async with make_gateway(handler) as gateway:
            text = await gateway.complete("SYSTEM", "USER")

        assert text == '{"ok": true}'
        assert captured["url"] == "https://gateway.test/v1/chat/completions"
        assert captured["auth"] == "Bearer test-key"
        assert captured["body"] == {
            "model": "google/gemini-2.5-flash",
            "messages": [
                {"role": "system", "content": "SYSTEM"},
                {"role": "user", "content": "USER"},
            ],
        }

    @pytest.mark.asyncio
    async def test_429_raises_rate_limited(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(429, json={"error": "slow down"}))

        with pytest.raises(RateLimitedError) as exc_info:
            await gateway.complete("s", "u")
        await gateway.aclose()

        assert exc_info.value.status_code == 429
        assert exc_info.value.http_status == 429
        assert isinstance(exc_info.value, RetryableError)

    @pytest.mark.asyncio
    async def test_402_raises_quota_exceeded(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(402))

        with pytest.raises(QuotaExceededError) as exc_info:
            await gateway.complete("s", "u")
        await gateway.aclose()

        assert exc_info.value.status_code == 402
        assert exc_info.value.public_message == "AI credits depleted. Please add credits to continue."

    @pytest.mark.parametrize("status_code", [400, 401, 404, 500, 503])
    @pytest.mark.asyncio
    async def test_other_errors_raise_upstream_error_with_status(self, make_gateway, status_code):
        gateway = make_gateway(lambda request: httpx.Response(status_code, text="boom"))

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.complete("s", "u")
        await gateway.aclose()

        assert type(exc_info.value) is UpstreamError
        assert exc_info.value.status_code == status_code
        assert exc_info.value.message == f"AI gateway error: {status_code}"

    @pytest.mark.asyncio
    async def test_transport_timeout_raises_upstream_timeout(self, make_gateway):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        gateway = make_gateway(handler)

        with pytest.raises(UpstreamTimeoutError) as exc_info:
            await gateway.complete("s", "u")
        await gateway.aclose()

        assert exc_info.value.timeout_seconds == 5.0
        assert exc_info.value.http_status == 504

    @pytest.mark.asyncio
    async def test_hanging_upstream_is_bounded(self, chat_completion):
        """A response slower than the configured bound becomes a timeout."""
        settings = Settings(
            _env_file=None,
            ai_gateway_api_key="test-key",
            ai_request_timeout_seconds=0.05,
        )

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json=chat_completion("{}"))

        gateway = AIGatewayClient(settings, transport=httpx.MockTransport(handler))

        with pytest.raises(UpstreamTimeoutError):
            await gateway.complete("s", "u")
        await gateway.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_raises_upstream_error(self, make_gateway):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gateway = make_gateway(handler)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.complete("s", "u")
        await gateway.aclose()

        assert exc_info.value.status_code is None
        assert not isinstance(exc_info.value, UpstreamTimeoutError)

    @pytest.mark.parametrize(
        "envelope",
        [{"choices": []}, {"choices": [{"message": {}}]}, {"error": "x"}, {"choices": [{"message": {"content": None}}]}],
    )
    @pytest.mark.asyncio
    async def test_missing_content_raises_parse_error(self, make_gateway, envelope):
        gateway = make_gateway(lambda request: httpx.Response(200, json=envelope))

        with pytest.raises(ParseError):
            await gateway.complete("s", "u")
        await gateway.aclose()

    @pytest.mark.asyncio
    async def test_non_json_envelope_raises_parse_error(self, make_gateway):
        gateway = make_gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(ParseError):
            await gateway.complete("s", "u")
        await gateway.aclose()
