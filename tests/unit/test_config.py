"""Unit tests for ChatConfig.

Tests environment loading and field validation.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pdf_chat.agent.config import ChatConfig, get_chat_config
from pdf_chat.agent.providers import Provider


class TestChatConfig:
    """Tests for ChatConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        """Config accepts valid values for all fields."""
        config = ChatConfig(
            api_key="gsk_test-key",
            provider="together",
            analysis_char_limit=6000,
            question_char_limit=4000,
            history_window=4,
            request_timeout=30.0,
            max_file_size=1024,
        )

        assert config.api_key == "gsk_test-key"
        assert config.provider is Provider.TOGETHER
        assert config.analysis_char_limit == 6000
        assert config.question_char_limit == 4000
        assert config.history_window == 4
        assert config.request_timeout == 30.0
        assert config.max_file_size == 1024

    def test_config_with_default_values(self) -> None:
        """Config falls back to the documented defaults."""
        with patch.dict("os.environ", {}, clear=True):
            config = ChatConfig()

        assert config.api_key == ""
        assert config.provider is None
        assert config.analysis_char_limit == 12000
        assert config.question_char_limit == 8000
        assert config.history_window == 6
        assert config.request_timeout == 120.0
        assert config.max_file_size == 10 * 1024 * 1024

    def test_config_strips_api_key_whitespace(self) -> None:
        """Config strips leading/trailing whitespace from API key."""
        config = ChatConfig(api_key="  hf_test-key  ")

        assert config.api_key == "hf_test-key"

    def test_empty_api_key_is_allowed(self) -> None:
        """An empty key is valid and means demo mode."""
        assert ChatConfig(api_key="").api_key == ""

    def test_provider_name_is_case_insensitive(self) -> None:
        assert ChatConfig(provider=" Cohere ").provider is Provider.COHERE

    def test_blank_provider_means_inferred(self) -> None:
        assert ChatConfig(provider="").provider is None

    def test_config_fails_with_unknown_provider(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(provider="openai")

        assert "provider" in str(exc_info.value).lower()

    @pytest.mark.parametrize(
        "field",
        ["analysis_char_limit", "question_char_limit", "max_file_size"],
    )
    def test_config_fails_with_non_positive_limits(self, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(**{field: 0})

        assert field in str(exc_info.value).lower()

    def test_config_fails_with_history_window_too_high(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ChatConfig(history_window=51)

        assert "history_window" in str(exc_info.value).lower()

    def test_config_fails_with_zero_timeout(self) -> None:
        with pytest.raises(ValidationError):
            ChatConfig(request_timeout=0)


class TestGetChatConfig:
    """Tests for get_chat_config factory function."""

    def test_get_config_from_environment(self) -> None:
        """get_chat_config loads settings from environment."""
        env = {
            "LLM_API_KEY": "co-env-key",
            "LLM_PROVIDER": "huggingface",
            "ANALYSIS_CHAR_LIMIT": "5000",
            "QUESTION_CHAR_LIMIT": "2500",
            "HISTORY_WINDOW": "0",
        }
        with patch.dict("os.environ", env):
            config = get_chat_config()

        assert config.api_key == "co-env-key"
        assert config.provider is Provider.HUGGINGFACE
        assert config.analysis_char_limit == 5000
        assert config.question_char_limit == 2500
        assert config.history_window == 0

    def test_get_config_rejects_invalid_environment(self) -> None:
        with (
            patch.dict("os.environ", {"QUESTION_CHAR_LIMIT": "-1"}),
            pytest.raises(ValidationError),
        ):
            get_chat_config()
