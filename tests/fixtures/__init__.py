"""Test fixtures for Fridge Chef."""

from tests.fixtures.mocks import MockClaudeService, create_mock_response

__all__ = ["MockClaudeService", "create_mock_response"]
