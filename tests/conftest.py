"""
Pytest Configuration and Shared Fixtures.

This module provides common fixtures for all tests:

- settings: Settings with a test gateway key and no .env lookup
- make_gateway: Builds an AIGatewayClient on an httpx.MockTransport
- chat_completion: Builds an OpenAI-style completion envelope
"""

from typing import Any, Callable

import httpx
import pytest

from contentpilot.config.settings import Settings
from contentpilot.generation.gateway import AIGatewayClient


def chat_completion(content: Any) -> dict:
    """Return a chat-completions envelope whose first message holds content."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "google/gemini-2.5-flash",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture(name="chat_completion")
def chat_completion_fixture() -> Callable[[Any], dict]:
    """Expose the envelope builder to tests."""
    return chat_completion


@pytest.fixture
def settings() -> Settings:
    """Settings with a configured gateway and no .env lookup."""
    return Settings(
        _env_file=None,
        ai_gateway_api_key="test-key",
        ai_gateway_url="https://gateway.test/v1",
        ai_model="google/gemini-2.5-flash",
        ai_request_timeout_seconds=5.0,
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings without a gateway key."""
    return Settings(_env_file=None, ai_gateway_api_key=None)


@pytest.fixture
def make_gateway(settings) -> Callable[..., AIGatewayClient]:
    """Factory for gateway clients backed by a request handler."""

    def _make(handler, gateway_settings: Settings | None = None) -> AIGatewayClient:
        return AIGatewayClient(
            gateway_settings or settings,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def sample_video_script() -> dict:
    """Return a sample video generation result."""
    return {
        "title": "5 AI Tools That Will Land You Your Next Job",
        "hook": "Still sending the same resume to every job?",
        "script": "Hi, I'm here to show you five tools...",
        "keyPoints": ["Resume tailoring", "Interview practice", "Portfolio polish"],
        "cta": "Grab the free toolkit in the description.",
    }


@pytest.fixture
def sample_repurposed() -> dict:
    """Return a sample repurpose result."""
    return {
        "youtube": {
            "title": "AI Resume Tips for Beginners",
            "description": "Learn how to use AI to write a better resume.",
            "hashtags": ["#ai", "#resume"],
            "script": "Full script...",
        },
        "youtubeShorts": {
            "title": "One AI resume trick",
            "hook": "Do this before you hit apply",
            "script": "60 second script",
            "hashtags": ["#shorts"],
        },
        "tiktok": {
            "hook": "POV: your resume finally gets callbacks",
            "script": "Fast-paced script",
            "trendSuggestion": "Use a trending voiceover sound",
            "hashtags": ["#tiktok"],
        },
        "instagram": {
            "hook": "Save this for your job hunt",
            "script": "On-screen text: step 1...",
            "caption": "Three AI prompts for a better resume",
            "hashtags": ["#instagram"],
        },
        "linkedin": {
            "hook": "I reviewed 200 resumes last month.",
            "script": "Here is what stood out...",
            "caption": "AI won't write your resume for you, but it helps.",
            "hashtags": ["#careers"],
        },
    }
