"""
Tests for generation prompt building.
"""

import pytest
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from slotted_context.models.requests import ContentRequest
from slotted_context.store.generation import (
    build_generation_messages,
    build_system_prompt,
    build_user_prompt,
    default_length,
)
from slotted_context.store.prompt_projection import NO_CONTEXT_PLACEHOLDER


@pytest.mark.asyncio
async def test_messages_embed_prompt_context(store, acme_document):
    await store.save(acme_document)

    messages = build_generation_messages(store, ContentRequest(content_type="blog", topic="Onboarding tips"))

    assert isinstance(messages[0], SystemMessage)
    assert isinstance(messages[1], HumanMessage)
    assert store.get_prompt_context() in messages[0].content
    assert "Create blog content about: Onboarding tips" in messages[1].content


def test_messages_without_document_use_placeholder(store):
    system, user = build_generation_messages(store, ContentRequest(content_type="email"))

    assert NO_CONTEXT_PLACEHOLDER in system.content
    assert "NEVER:" not in system.content
    assert "Target length" not in user.content


def test_persona_constraints_are_listed(acme_document):
    prompt = build_system_prompt(acme_document, "social")

    assert "NEVER:" in prompt
    assert "- No competitor bashing" in prompt
    assert "Hashtag strategy" in prompt


def test_length_falls_back_to_preferences(acme_document):
    assert default_length(acme_document, "blog") == 2000
    assert default_length(acme_document, "script") is None
    assert default_length(None, "blog") is None

    social = build_user_prompt(ContentRequest(content_type="social"), acme_document)
    assert "Target length: 280 characters" in social

    blog = build_user_prompt(ContentRequest(content_type="blog", length=800), acme_document)
    assert "Target length: 800 words" in blog


def test_optional_request_fields(acme_document):
    prompt = build_user_prompt(
        ContentRequest(content_type="email", tone="urgent", custom_instructions="Mention the webinar"),
        acme_document,
    )

    assert "Tone: urgent" in prompt
    assert "Additional instructions: Mention the webinar" in prompt


def test_rejects_unknown_content_type():
    with pytest.raises(ValidationError):
        ContentRequest(content_type="poem")
