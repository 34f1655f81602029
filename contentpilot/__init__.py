"""
ContentPilot - AI content generation and repurposing service for creators.

This package contains the modules for the ContentPilot backend:
- generation: Prompt templates, AI gateway client, response normalization
- api: FastAPI application and endpoints
- config: Pydantic settings and configuration
- core: Exception hierarchy shared by every layer
- monitoring: Structured logging setup and Prometheus metrics
"""

__version__ = "0.1.0"
