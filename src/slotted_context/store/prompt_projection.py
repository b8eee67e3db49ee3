"""Flattened plain-text rendering of a context document for AI prompts."""

from typing import Iterable, List, Optional

from ..models.context_document import ContextDocument

NO_CONTEXT_PLACEHOLDER = "No company context available. Please complete onboarding first."


def _join(values: Iterable[str]) -> str:
    return ", ".join(values)


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def render_prompt_context(document: Optional[ContextDocument]) -> str:
    """
    Render the company, brand, marketing, go-to-market and AI persona sections
    as labeled plain text.

    The output is a pure function of ``document``. When there is no document a
    fixed placeholder is returned instead, because AI collaborators may ask for
    context before onboarding has finished.

    Args:
        document: The current context document, or None

    Returns:
        str: Prompt-ready context block
    """
    if document is None:
        return NO_CONTEXT_PLACEHOLDER

    company = document.company
    brand = document.brand_identity
    goals = document.marketing_goals
    gtm = document.gtm_strategy
    persona = document.ai_persona

    lines: List[str] = [
        "COMPANY CONTEXT (MCP):",
        f"Company: {company.name} - {company.industry}",
        f"Size: {_text(company.size)}",
        f"Description: {company.description}",
    ]
    if company.website:
        lines.append(f"Website: {company.website}")

    lines += [
        "",
        "BRAND DNA:",
        f"Value Propositions: {_join(brand.value_propositions)}",
        f"Core Offerings: {_join(brand.core_offerings)}",
        f"Target Audience: {brand.target_audience.demographics}",
        f"Psychographics: {brand.target_audience.psychographics}",
        f"Pain Points: {_join(brand.target_audience.pain_points)}",
    ]
    if brand.target_audience.impact:
        lines.append(f"Impact: {brand.target_audience.impact}")
    lines += [
        f"Brand Tone: {_join(brand.brand_tone.personality)} - {_text(brand.brand_tone.communication_style)}",
        f"Voice Attributes: {_join(brand.brand_tone.voice_attributes)}",
        f"Brand Colors: Primary: {brand.brand_colors.primary}, "
        f"Secondary: {brand.brand_colors.secondary}, Accent: {brand.brand_colors.accent}",
        "",
        "MARKETING STRATEGY:",
        f"Primary Goals: {_join(goals.primary_goals)}",
        f"KPIs: {_join(goals.kpis)}",
        f"Content Cadence: {goals.cadence}",
    ]
    if goals.budget:
        lines.append(f"Budget: {goals.budget}")
    lines += [
        f"Primary Channels: {_join(goals.channels.primary)}",
        f"Secondary Channels: {_join(goals.channels.secondary)}",
        f"Experimental Channels: {_join(goals.channels.experimental)}",
        "",
        "GTM STRATEGY:",
        f"Market Position: {gtm.market_position}",
        f"Competitive Advantage: {gtm.competitive_advantage}",
    ]
    for segment in gtm.segments:
        lines.append(
            f"Segment: {segment.name} - {segment.description} "
            f"(Channels: {_join(segment.channels)}; Messaging: {segment.messaging})"
        )

    lines += [
        "",
        "AI PERSONA:",
        f"Personality: {_join(persona.personality_traits)}",
        f"Communication: {persona.communication_pattern}",
        f"Knowledge Areas: {_join(persona.knowledge_areas)}",
        f"Constraints: {_join(persona.constraints)}",
    ]
    return "\n".join(lines)
