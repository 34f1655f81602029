"""FastAPI dependency injection providers.

This module provides dependency functions for injecting services into route handlers.
"""

from typing import Optional

from fastapi import Depends

from contentpilot.config.settings import Settings, get_settings
from contentpilot.generation.orchestrator import ContentGenerator

# Global instance for singleton pattern
_content_generator: Optional[ContentGenerator] = None


def get_content_generator(settings: Settings = Depends(get_settings)) -> ContentGenerator:
    """
    Get ContentGenerator instance.

    Uses a singleton pattern so every request shares one gateway HTTP client.

    Returns:
        ContentGenerator bound to the process settings.

    Raises:
        ConfigError: If the gateway key is not configured. Nothing is cached
            in that case, so a later request can succeed once it is set.
    """
    global _content_generator

    if _content_generator is None:
        _content_generator = ContentGenerator(settings)

    return _content_generator


async def close_dependencies() -> None:
    """
    Close and reset all global dependency instances.

    Called on application shutdown; also useful for testing.
    """
    global _content_generator
    if _content_generator is not None:
        await _content_generator.aclose()
    _content_generator = None
