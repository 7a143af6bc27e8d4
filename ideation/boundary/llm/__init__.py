"""LLM provider access: model registry and streaming gateway."""

from ideation.boundary.llm.model_registry import (
    MODEL_ALIASES,
    resolve_model_string,
    strip_provider_prefix,
)
from ideation.boundary.llm.provider_gateway import (
    HistoryTurn,
    LangChainProviderGateway,
    ProviderFragment,
    ProviderGateway,
    ProviderRequest,
    ResultFragment,
    TextFragment,
)

__all__ = [
    "MODEL_ALIASES",
    "HistoryTurn",
    "LangChainProviderGateway",
    "ProviderFragment",
    "ProviderGateway",
    "ProviderRequest",
    "ResultFragment",
    "TextFragment",
    "resolve_model_string",
    "strip_provider_prefix",
]
