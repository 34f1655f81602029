"""
Configuration Management.

Centralized configuration using Pydantic Settings.

Configuration sources (in order of precedence):
1. Environment variables
2. .env file
3. Default values

The AI gateway key is loaded from the environment and never committed to
source control.

Example:
    from contentpilot.config import get_settings

    settings = get_settings()
    model = settings.ai_model
"""

from contentpilot.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
