"""
Model alias resolution and chat model construction.

Model identifiers are provider-prefixed (`bedrock:<id>`, `google:<id>`).
Short aliases such as `sonnet` resolve to a canonical prefixed id; the
gateway strips the prefix before calling the provider.

Dependencies: langchain_aws, langchain_google_genai, ideation.configs
System role: Provider selection for the LangChain provider gateway
"""

import logging

from langchain_aws import ChatBedrockConverse
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from ideation.configs.llm import LLMSettings
from ideation.core.exceptions import ModelResolutionError

logger = logging.getLogger(__name__)

PROVIDER_BEDROCK = "bedrock"
PROVIDER_GOOGLE = "google"
KNOWN_PROVIDERS = (PROVIDER_BEDROCK, PROVIDER_GOOGLE)

MODEL_ALIASES: dict[str, str] = {
    "haiku": "bedrock:global.anthropic.claude-haiku-4-5-20251001-v1:0",
    "sonnet": "bedrock:global.anthropic.claude-sonnet-4-5-20250929-v1:0",
    "opus": "bedrock:global.anthropic.claude-opus-4-1-20250805-v1:0",
    "gemini-flash": "google:gemini-2.5-flash",
    "gemini-pro": "google:gemini-2.5-pro",
}


def _split_prefix(model_id: str) -> tuple[str | None, str]:
    prefix, sep, rest = model_id.partition(":")
    if sep and prefix.lower() in KNOWN_PROVIDERS:
        return prefix.lower(), rest
    return None, model_id


def resolve_model_string(model: str | None, default: str = "sonnet") -> str:
    """
    Resolve an alias or bare id to a canonical provider-prefixed id.

    Args:
        model: Alias (`sonnet`), prefixed id (`google:gemini-2.5-pro`),
            bare id, or None for the default
        default: Alias or id used when model is empty

    Returns:
        str: Provider-prefixed model id

    Example:
        >>> resolve_model_string("haiku")
        'bedrock:global.anthropic.claude-haiku-4-5-20251001-v1:0'
    """
    candidate = (model or "").strip() or default
    alias = MODEL_ALIASES.get(candidate.lower())
    if alias:
        return alias

    provider, bare = _split_prefix(candidate)
    if provider:
        return f"{provider}:{bare}"

    # Bare ids: Gemini models are recognisable by name, everything else is Bedrock
    if candidate.lower().startswith("gemini"):
        return f"{PROVIDER_GOOGLE}:{candidate}"
    return f"{PROVIDER_BEDROCK}:{candidate}"


def strip_provider_prefix(model_id: str) -> str:
    """Return the provider-native model id without the `provider:` prefix."""
    return _split_prefix(model_id)[1]


def get_provider_name(model_id: str) -> str:
    """
    Provider name for a prefixed model id.

    Raises:
        ModelResolutionError: If the id carries no known provider prefix
    """
    provider, _ = _split_prefix(model_id)
    if provider is None:
        raise ModelResolutionError(model_id)
    return provider


def create_chat_model(model_id: str, settings: LLMSettings) -> BaseChatModel:
    """
    Build a streaming-capable LangChain chat model for a prefixed id.

    Args:
        model_id: Provider-prefixed model id
        settings: LLM settings (region, temperature, credentials)

    Returns:
        BaseChatModel: Configured chat model

    Raises:
        ModelResolutionError: If the provider is not supported
    """
    provider = get_provider_name(model_id)
    bare_model = strip_provider_prefix(model_id)
    logger.info(
        "Creating chat model",
        extra={"provider": provider, "model": bare_model},
    )

    if provider == PROVIDER_BEDROCK:
        return ChatBedrockConverse(
            model=bare_model,
            region_name=settings.aws_region,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )

    if provider == PROVIDER_GOOGLE:
        kwargs: dict = {"model": bare_model, "temperature": settings.temperature}
        if settings.max_tokens is not None:
            kwargs["max_output_tokens"] = settings.max_tokens
        if settings.google_api_key:
            kwargs["google_api_key"] = settings.google_api_key
        return ChatGoogleGenerativeAI(**kwargs)

    raise ModelResolutionError(model_id)
