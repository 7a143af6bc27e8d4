"""
LangChain to Langfuse prompt converter.

Turns a ChatPromptTemplate into Langfuse chat messages, rewriting
`{variable}` placeholders to Langfuse's `{{variable}}` syntax.

Dependencies: langchain_core.prompts
System role: Template format conversion for prompt registry
"""

import re
from typing import TypedDict

from langchain_core.prompts import ChatPromptTemplate
from langchain_core.prompts.chat import (
    AIMessagePromptTemplate,
    HumanMessagePromptTemplate,
    SystemMessagePromptTemplate,
)

# Single braces only; doubled braces are already Langfuse variables
_VARIABLE_PATTERN = re.compile(r"(?<!\{)\{([^{}]+)\}(?!\})")

_ROLES = {
    SystemMessagePromptTemplate: "system",
    HumanMessagePromptTemplate: "user",
    AIMessagePromptTemplate: "assistant",
}


class LangfuseMessage(TypedDict):
    """Langfuse chat message format."""

    role: str
    content: str


def to_langfuse_variables(content: str) -> str:
    """Rewrite `{name}` placeholders as `{{name}}`."""
    return _VARIABLE_PATTERN.sub(r"{{\1}}", content)


def convert_chat_template(template: ChatPromptTemplate) -> list[LangfuseMessage]:
    """
    Convert a ChatPromptTemplate to Langfuse chat messages.

    Args:
        template: LangChain chat template

    Returns:
        list[LangfuseMessage]: Messages in template order

    Raises:
        ValueError: If the template holds placeholders or unknown message types

    Example:
        >>> template = ChatPromptTemplate.from_messages([("system", "Focus: {focus}")])
        >>> convert_chat_template(template)
        [{'role': 'system', 'content': 'Focus: {{focus}}'}]
    """
    messages: list[LangfuseMessage] = []
    for msg in template.messages:
        role = _ROLES.get(type(msg))
        if role is None:
            raise ValueError(f"Unsupported message type: {type(msg)}")
        content = to_langfuse_variables(str(msg.prompt.template))
        messages.append(LangfuseMessage(role=role, content=content))
    return messages
