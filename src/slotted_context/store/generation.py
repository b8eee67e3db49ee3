"""Prompt messages for AI content generation built from the context store.

AI collaborators never read the document directly; they ask for a message pair
that already embeds the prompt projection and send it to whichever model they
are configured with.
"""

from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from ..models.context_document import ContextDocument
from ..models.requests import ContentRequest
from ..prompts import get_content_generation_prompt
from ..utils.logging import get_logger
from .context_store import ContextStore
from .prompt_projection import render_prompt_context

logger = get_logger(__name__)


def default_length(document: Optional[ContextDocument], content_type: str) -> Optional[int]:
    """Return the document's preferred length for ``content_type``, if it has one."""
    if document is None:
        return None
    preferences = document.content_preferences.length_preferences
    return {
        "blog": preferences.blog,
        "social": preferences.social,
        "email": preferences.email,
    }.get(content_type)


def _load_template(document: Optional[ContextDocument]) -> dict:
    return get_content_generation_prompt(
        prompt_context=render_prompt_context(document),
        style_guidelines="\n".join(
            f"- {g}" for g in (document.content_preferences.style_guidelines if document else [])
        ),
        constraints="\n".join(
            f"- {c}" for c in (document.ai_persona.constraints if document else [])
        ),
    )


def build_system_prompt(document: Optional[ContextDocument], content_type: str) -> str:
    template = _load_template(document)

    parts = [template["system"].strip()]
    if document is not None and document.content_preferences.style_guidelines:
        parts.append(template["style_guidelines"].strip())
    if document is not None and document.ai_persona.constraints:
        parts.append(template["persona_constraints"].strip())
    type_prompt = template["content_types"].get(content_type)
    if type_prompt:
        parts.append(type_prompt.strip())
    return "\n\n".join(parts)


def build_user_prompt(request: ContentRequest, document: Optional[ContextDocument] = None) -> str:
    template = _load_template(document)
    prompt = f"Create {request.content_type} content"
    if request.topic:
        prompt += f" about: {request.topic}"

    length = request.length or default_length(document, request.content_type)
    if length:
        unit = "characters" if request.content_type == "social" else "words"
        prompt += f"\nTarget length: {length} {unit}"

    if request.tone:
        prompt += f"\nTone: {request.tone}"
    if request.custom_instructions:
        prompt += f"\nAdditional instructions: {request.custom_instructions}"

    return prompt + "\n\n" + template["user_closing"].strip()


def build_generation_messages(store: ContextStore, request: ContentRequest) -> List[BaseMessage]:
    """
    Build the system and user messages for one content generation request.

    Args:
        store (ContextStore): Store whose current document supplies the context
        request (ContentRequest): What to generate

    Returns:
        List[BaseMessage]: ``[SystemMessage, HumanMessage]`` ready for a chat model
    """
    document = store.get_current()
    if document is None:
        logger.warning(
            "Building generation prompt without company context",
            extra={"content_type": request.content_type}
        )

    return [
        SystemMessage(content=build_system_prompt(document, request.content_type)),
        HumanMessage(content=build_user_prompt(request, document)),
    ]
