"""
Ideation system prompt and per-session context.

Defines the system prompt template for brainstorming turns and the builder
that fills it with the session's focus area, project context files and the
ideas already captured for the project. Supports Langfuse prompt registry
integration.

Dependencies: langchain_core.prompts, ideation.observability.prompt_registry,
    ideation.boundary.storage
System role: System prompt assembly for ideation turns
"""

import logging
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from langchain_core.prompts import ChatPromptTemplate

from ideation.boundary.storage.idea_store import IdeaStore
from ideation.boundary.storage.paths import ProjectLayout
from ideation.configs.observability import ObservabilitySettings
from ideation.configs.storage import StorageSettings
from ideation.models.idea import Idea, IdeaCategory, IdeaStatus
from ideation.models.session import IdeationSession
from ideation.observability.prompt_registry.models import ModelConfig
from ideation.observability.prompt_registry.registry import PromptRegistry

logger = logging.getLogger(__name__)

IDEATION_PROMPT_NAME = "ideation-system"

CONTEXT_FILE_SUFFIXES = (".md", ".txt")

SYSTEM_PROMPT = """You are a product ideation partner helping a developer brainstorm improvements for their project.

## Instructions
1. Ask clarifying questions when the goal is vague
2. Propose concrete, actionable ideas rather than generic advice
3. For each idea, give a short title, a one-paragraph description, and a rough impact and effort estimate
4. Build on ideas the user likes and drop the ones they reject
5. Keep answers focused and skimmable; use short lists

## Existing Work
Ideas already captured for this project are listed below when present.
Do not repeat them; extend or combine them instead.
{focus_section}{context_section}{ideas_section}"""

IDEATION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
])

CATEGORY_DESCRIPTIONS: dict[IdeaCategory, str] = {
    IdeaCategory.FEATURE: "New features and capabilities users would value",
    IdeaCategory.UX_UI: "User experience, interface design and usability improvements",
    IdeaCategory.DX: "Developer experience: tooling, build speed, docs and onboarding",
    IdeaCategory.GROWTH: "User acquisition, activation, retention and monetisation",
    IdeaCategory.TECHNICAL: "Architecture, refactoring, technical debt and code quality",
    IdeaCategory.SECURITY: "Security hardening, vulnerability fixes and data protection",
    IdeaCategory.PERFORMANCE: "Speed, resource usage and scalability",
    IdeaCategory.ACCESSIBILITY: "Making the product usable for people with disabilities",
    IdeaCategory.ANALYTICS: "Metrics, instrumentation and data-driven insights",
}


def register_ideation_prompt(
    model: str = "sonnet",
    temperature: float = 0.7,
    labels: list[str] | None = None,
) -> None:
    """
    Register the ideation system prompt with Langfuse.

    Args:
        model: Model alias the prompt is tuned for
        temperature: Model temperature
        labels: Optional labels (e.g., ["production", "staging"])
    """
    registry = PromptRegistry()

    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    registry.register_prompt(
        name=IDEATION_PROMPT_NAME,
        template=IDEATION_PROMPT,
        config=ModelConfig(model=model, temperature=temperature),
        labels=labels or ["development"],
    )
    logger.info("Registered ideation prompt: name=%s", IDEATION_PROMPT_NAME)


def get_ideation_prompt(
    use_registry: bool = False,
    label: str | None = None,
) -> ChatPromptTemplate:
    """
    Get the ideation system prompt template.

    Args:
        use_registry: Whether to fetch from Langfuse registry
        label: Optional label filter when using registry

    Returns:
        ChatPromptTemplate: Registry version when available, else the local template
    """
    if use_registry:
        registry = PromptRegistry()
        if registry.is_enabled:
            try:
                prompt = registry.get_langchain_prompt(IDEATION_PROMPT_NAME, label=label)
            except Exception as e:
                logger.warning(
                    "Prompt registry fetch failed, using local template",
                    extra={"prompt_name": IDEATION_PROMPT_NAME, "error_msg": str(e)},
                )
                prompt = None
            if prompt is not None:
                logger.debug("Using prompt from registry: name=%s", IDEATION_PROMPT_NAME)
                return prompt

    return IDEATION_PROMPT


def load_context_files(context_dir: Path, max_chars: int) -> str:
    """
    Concatenate project context documents.

    Reads `.md` and `.txt` files in name order, each under its own heading,
    and truncates the result to the character budget.

    Args:
        context_dir: Directory holding context documents
        max_chars: Character budget for the combined text

    Returns:
        str: Combined context, empty if the directory is missing or empty
    """
    if not context_dir.is_dir():
        return ""

    parts: list[str] = []
    for path in sorted(context_dir.iterdir()):
        if not path.is_file() or path.suffix.lower() not in CONTEXT_FILE_SUFFIXES:
            continue
        try:
            text = path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Skipping unreadable context file",
                extra={"path": str(path), "error_msg": str(e)},
            )
            continue
        if text:
            parts.append(f"### {path.name}\n{text}")

    combined = "\n\n".join(parts)
    if len(combined) > max_chars:
        combined = combined[:max_chars].rstrip() + "\n[truncated]"
    return combined


def format_existing_ideas(ideas: list[Idea]) -> str:
    """One line per non-archived idea: title, category and status."""
    lines = [
        f"- {idea.title} ({idea.category.value}, {idea.status.value})"
        for idea in ideas
        if idea.status != IdeaStatus.ARCHIVED
    ]
    return "\n".join(lines)


class IdeationContextBuilder:
    """Builds the system prompt for a session's next turn."""

    def __init__(
        self,
        idea_store: IdeaStore,
        settings: StorageSettings | None = None,
        observability: ObservabilitySettings | None = None,
    ) -> None:
        self.idea_store = idea_store
        self.settings = settings or StorageSettings()
        self.layout = ProjectLayout(self.settings)
        self.observability = observability

    def _template(self) -> ChatPromptTemplate:
        if self.observability is None:
            return IDEATION_PROMPT
        return get_ideation_prompt(
            use_registry=self.observability.use_prompt_registry,
            label=self.observability.prompt_label,
        )

    async def build_system_prompt(self, session: IdeationSession) -> str | None:
        """
        Render the system prompt for a session.

        Args:
            session: Session the turn belongs to

        Returns:
            str: Rendered system prompt
        """
        focus_section = ""
        if session.prompt_category is not None:
            description = CATEGORY_DESCRIPTIONS.get(session.prompt_category, "")
            focus_section = (
                f"\n\n## Focus Area\n{session.prompt_category.value}: {description}"
            )

        context_dir = self.layout.context_dir(session.project_path)
        context = await run_in_threadpool(
            load_context_files, context_dir, self.settings.max_context_chars
        )
        context_section = f"\n\n## Project Context\n{context}" if context else ""

        ideas = await self.idea_store.list_all(session.project_path)
        existing = format_existing_ideas(ideas)
        ideas_section = f"\n\n## Existing Ideas\n{existing}" if existing else ""

        messages = self._template().format_messages(
            focus_section=focus_section,
            context_section=context_section,
            ideas_section=ideas_section,
        )
        system_prompt = "\n\n".join(str(m.content) for m in messages)

        logger.debug(
            "Built system prompt",
            extra={
                "session_id": session.id,
                "prompt_len": len(system_prompt),
                "context_chars": len(context),
                "existing_ideas": len(ideas),
            },
        )
        return system_prompt
