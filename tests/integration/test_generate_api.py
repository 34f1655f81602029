"""Integration tests for the generate-content HTTP endpoint.

Tests the flow: HTTP request -> ContentGenerator -> stubbed AI gateway -> JSON
response, using FastAPI's TestClient and httpx.MockTransport.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from contentpilot.api import dependencies
from contentpilot.api.dependencies import get_content_generator
from contentpilot.api.main import app
from contentpilot.config.settings import get_settings
from contentpilot.generation.orchestrator import ContentGenerator

ENDPOINT = "/api/v1/generate-content"


class TestGenerateContentEndpoint:
    """End-to-end scenarios against a stubbed gateway."""

    @pytest.fixture
    def gateway_calls(self) -> list:
        return []

    @pytest.fixture
    def client_for(self, settings, make_gateway, gateway_calls):
        """Build a TestClient whose gateway answers with the given handler."""

        def _client(handler) -> TestClient:
            def recording_handler(request: httpx.Request) -> httpx.Response:
                gateway_calls.append(json.loads(request.content))
                return handler(request)

            app.dependency_overrides[get_content_generator] = lambda: ContentGenerator(
                settings, gateway=make_gateway(recording_handler)
            )
            return TestClient(app, raise_server_exceptions=False)

        yield _client
        app.dependency_overrides.clear()

    def test_empty_topic_returns_400_without_upstream_call(self, client_for, gateway_calls, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.post(ENDPOINT, json={"topic": "", "type": "generate"})

        assert response.status_code == 400
        assert response.json() == {"error": "Topic is required"}
        assert gateway_calls == []

    def test_missing_topic_is_treated_as_empty(self, client_for, gateway_calls, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.post(ENDPOINT, json={"type": "generate"})

        assert response.status_code == 400
        assert gateway_calls == []

    def test_blog_generation_returns_object_unchanged(self, client_for, gateway_calls, chat_completion):
        payload = {"title": "T", "content": "body text", "keyPoints": ["a", "b"]}
        client = client_for(lambda request: httpx.Response(200, json=chat_completion(json.dumps(payload))))

        response = client.post(
            ENDPOINT,
            json={"topic": "AI resume tips", "type": "generate", "contentType": "blog"},
        )

        assert response.status_code == 200
        assert response.json() == payload
        assert len(gateway_calls) == 1
        assert "AI resume tips" in gateway_calls[0]["messages"][1]["content"]

    def test_fenced_response_is_unwrapped(self, client_for, chat_completion):
        client = client_for(
            lambda request: httpx.Response(200, json=chat_completion('Sure! ```json\n{"a":1}\n```'))
        )

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 200
        assert response.json() == {"a": 1}

    def test_repurpose_returns_platform_variants(self, client_for, sample_repurposed, chat_completion):
        client = client_for(
            lambda request: httpx.Response(200, json=chat_completion(json.dumps(sample_repurposed)))
        )

        response = client.post(ENDPOINT, json={"topic": "Original script", "type": "repurpose"})

        assert response.status_code == 200
        assert set(response.json()) == {"youtube", "youtubeShorts", "tiktok", "instagram", "linkedin"}

    def test_upstream_429_maps_to_rate_limited(self, client_for):
        client = client_for(lambda request: httpx.Response(429))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded. Please try again in a moment."}

    def test_upstream_402_maps_to_quota_exceeded(self, client_for):
        client = client_for(lambda request: httpx.Response(402))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 402
        assert response.json() == {"error": "AI credits depleted. Please add credits to continue."}

    def test_other_upstream_status_maps_to_500(self, client_for):
        client = client_for(lambda request: httpx.Response(503, text="unavailable"))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI gateway error: 503"}

    def test_upstream_timeout_maps_to_504(self, client_for):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = client_for(handler)

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 504
        assert "error" in response.json()

    def test_malformed_model_output_maps_to_500(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion('{"title": "x"')))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Model response was not valid JSON")

    def test_unknown_request_type_is_rejected(self, client_for, gateway_calls, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "summarize"})

        assert response.status_code == 422
        assert response.json()["error"] == "Request validation failed"
        assert gateway_calls == []

    def test_options_preflight_returns_empty_200(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.options(ENDPOINT)

        assert response.status_code == 200
        assert response.content == b""

    def test_cors_preflight_allows_browser_client(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.options(
            ENDPOINT,
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, x-client-info, apikey, content-type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.content == b""
        assert response.headers["access-control-allow-headers"] == (
            "authorization, x-client-info, apikey, content-type"
        )

    def test_cors_preflight_with_extra_header_still_succeeds(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion("{}")))

        response = client.options(
            ENDPOINT,
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type, x-supabase-api-version",
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_header_on_responses(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion('{"a": 1}')))

        response = client.post(
            ENDPOINT,
            json={"topic": "x", "type": "generate"},
            headers={"Origin": "https://app.example.com"},
        )

        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_header_without_origin(self, client_for, chat_completion):
        client = client_for(lambda request: httpx.Response(200, json=chat_completion('{"a": 1}')))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_header_on_error_responses(self, client_for):
        client = client_for(lambda request: httpx.Response(429))

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 429
        assert response.headers["access-control-allow-origin"] == "*"

    def test_non_standard_json_constants_map_to_parse_error(self, client_for, chat_completion):
        client = client_for(
            lambda request: httpx.Response(200, json=chat_completion('{"a": NaN, "b": Infinity}'))
        )

        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 500
        assert response.json()["error"].startswith("Model response was not valid JSON")
        assert response.headers["access-control-allow-origin"] == "*"


class TestMissingConfiguration:
    """The service answers with a JSON error when the gateway key is absent."""

    @pytest.fixture
    def client(self, unconfigured_settings, monkeypatch):
        monkeypatch.setattr(dependencies, "_content_generator", None)
        app.dependency_overrides[get_settings] = lambda: unconfigured_settings
        yield TestClient(app, raise_server_exceptions=False)
        app.dependency_overrides.clear()

    def test_generate_returns_config_error(self, client):
        response = client.post(ENDPOINT, json={"topic": "x", "type": "generate"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI_GATEWAY_API_KEY is not configured"}
        assert dependencies._content_generator is None

    def test_readiness_fails(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 503

    def test_health_reports_gateway_unhealthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unhealthy"
        assert body["services"]["ai_gateway"]["status"] == "unhealthy"
