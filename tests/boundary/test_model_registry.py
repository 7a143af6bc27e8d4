"""Tests for model alias resolution and chat model construction."""

from unittest.mock import patch

import pytest

from ideation.boundary.llm.model_registry import (
    MODEL_ALIASES,
    create_chat_model,
    get_provider_name,
    resolve_model_string,
    strip_provider_prefix,
)
from ideation.configs.llm import LLMSettings
from ideation.core.exceptions import ModelResolutionError


class TestResolveModelString:
    @pytest.mark.parametrize("alias", sorted(MODEL_ALIASES))
    def test_aliases(self, alias: str) -> None:
        assert resolve_model_string(alias) == MODEL_ALIASES[alias]

    def test_alias_case_insensitive(self) -> None:
        assert resolve_model_string("Sonnet") == MODEL_ALIASES["sonnet"]

    @pytest.mark.parametrize("value", [None, "", "  "])
    def test_empty_uses_default(self, value) -> None:
        assert resolve_model_string(value, default="haiku") == MODEL_ALIASES["haiku"]

    def test_prefixed_id_kept(self) -> None:
        assert resolve_model_string("google:gemini-2.0-flash") == "google:gemini-2.0-flash"

    def test_bare_gemini_is_google(self) -> None:
        assert resolve_model_string("gemini-2.0-flash") == "google:gemini-2.0-flash"

    def test_bare_bedrock_id_keeps_colons(self) -> None:
        bare = "anthropic.claude-3-haiku-20240307-v1:0"
        assert resolve_model_string(bare) == f"bedrock:{bare}"


class TestProviderHelpers:
    def test_strip_prefix(self) -> None:
        assert strip_provider_prefix("bedrock:foo-v1:0") == "foo-v1:0"
        assert strip_provider_prefix("foo-v1:0") == "foo-v1:0"

    def test_provider_name(self) -> None:
        assert get_provider_name("google:gemini-2.5-pro") == "google"

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ModelResolutionError):
            get_provider_name("openai:gpt-4o")


class TestCreateChatModel:
    def test_bedrock(self) -> None:
        settings = LLMSettings(aws_region="us-east-1", temperature=0.2, max_tokens=512)

        with patch("ideation.boundary.llm.model_registry.ChatBedrockConverse") as bedrock:
            create_chat_model(MODEL_ALIASES["sonnet"], settings)

        bedrock.assert_called_once_with(
            model=strip_provider_prefix(MODEL_ALIASES["sonnet"]),
            region_name="us-east-1",
            temperature=0.2,
            max_tokens=512,
        )

    def test_google(self) -> None:
        settings = LLMSettings(temperature=0.5, google_api_key="key")

        with patch("ideation.boundary.llm.model_registry.ChatGoogleGenerativeAI") as google:
            create_chat_model("google:gemini-2.5-flash", settings)

        kwargs = google.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["google_api_key"] == "key"
        assert "max_output_tokens" not in kwargs

    def test_unsupported(self) -> None:
        with pytest.raises(ModelResolutionError):
            create_chat_model("azure:gpt", LLMSettings())
