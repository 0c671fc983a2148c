"""Unit tests for individual components in isolation.

Coverage:
    - parsing/: Validation, text extraction and normalization
    - agent/: Prompts, provider wire formats, fallback policy, conversation state
    - config: Environment loading and validation

Uses mocks for external services. Leverages pytest-check for multiple
assertions per test.
"""
