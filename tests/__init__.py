"""
ContentPilot Test Suite.

- unit/: Prompt builder, normalizer, result variants, gateway client, orchestrator
- integration/: HTTP API with a stubbed AI gateway
- conftest.py: Shared fixtures and test configuration

Run tests with: pytest
"""
