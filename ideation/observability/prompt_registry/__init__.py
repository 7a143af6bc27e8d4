"""
Langfuse prompt registry module.

Versions the ideation system prompt in Langfuse from its LangChain
ChatPromptTemplate, together with the model settings it was tuned for.

Dependencies: langfuse, langchain_core, pydantic
System role: Prompt version management and LangChain integration
"""

from ideation.observability.prompt_registry.models import ModelConfig
from ideation.observability.prompt_registry.registry import PromptRegistry

__all__ = ["PromptRegistry", "ModelConfig"]
