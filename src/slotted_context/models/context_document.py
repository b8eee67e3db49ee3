"""Pydantic models for the Slotted context document.

The context document is the single structured record of a company's brand,
marketing goals and AI persona configuration. Every section is optional during
onboarding, so every field carries a default; the defaults below are the ones
onboarding starts from.

Attributes use snake_case in Python and camelCase in JSON snapshots, which keeps
exported files compatible with documents written by the web client.
"""

import re
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "1.0.0"

DEFAULT_BRAND_COLORS = {
    "primary": "#2563eb",
    "secondary": "#3b82f6",
    "accent": "#10b981",
}
DEFAULT_CADENCE = "weekly"
DEFAULT_LENGTH_PREFERENCES = {
    "blog": 2000,
    "social": 280,
    "email": 500,
}

CompanySize = Literal["startup", "small", "medium", "enterprise"]
CommunicationStyle = Literal["formal", "casual", "conversational", "technical"]
Cadence = Literal["daily", "weekly", "bi-weekly", "monthly"]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class ContextModel(BaseModel):
    """Base model shared by every section of the context document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Company(ContextModel):
    """Basic facts about the company."""

    name: str = Field("", description="Official company name")
    industry: str = Field("", description="Sector the business operates in")
    size: Optional[CompanySize] = Field(None, description="Company size band")
    description: str = Field("", description="Short description of the business")
    website: Optional[str] = Field(None, description="Company website URL")


class TargetAudience(ContextModel):
    demographics: str = Field("", description="Who the audience is")
    psychographics: str = Field("", description="What the audience values and believes")
    pain_points: List[str] = Field(default_factory=list, description="Problems the audience needs solved")
    impact: Optional[str] = Field(None, description="Narrative of the impact on the audience")


class BrandTone(ContextModel):
    personality: List[str] = Field(default_factory=list, description="Brand personality tags")
    voice_attributes: List[str] = Field(default_factory=list, description="Attributes of the brand voice")
    communication_style: Optional[CommunicationStyle] = Field(None, description="Overall communication style")


class BrandColors(ContextModel):
    primary: str = DEFAULT_BRAND_COLORS["primary"]
    secondary: str = DEFAULT_BRAND_COLORS["secondary"]
    accent: str = DEFAULT_BRAND_COLORS["accent"]

    @field_validator("primary", "secondary", "accent")
    @classmethod
    def validate_hex_color(cls, value: str) -> str:
        if not _HEX_COLOR.match(value):
            raise ValueError(f"'{value}' is not a hex color such as #2563eb")
        return value.lower()


class BrandIdentity(ContextModel):
    """Brand DNA: what the company offers, to whom, and how it sounds."""

    value_propositions: List[str] = Field(default_factory=list)
    core_offerings: List[str] = Field(default_factory=list)
    target_audience: TargetAudience = Field(default_factory=TargetAudience)
    brand_tone: BrandTone = Field(default_factory=BrandTone)
    brand_colors: BrandColors = Field(default_factory=BrandColors)


class ChannelSets(ContextModel):
    primary: List[str] = Field(default_factory=list)
    secondary: List[str] = Field(default_factory=list)
    experimental: List[str] = Field(default_factory=list)


class MarketingGoals(ContextModel):
    primary_goals: List[str] = Field(default_factory=list)
    kpis: List[str] = Field(default_factory=list)
    cadence: Cadence = DEFAULT_CADENCE
    budget: Optional[str] = Field(None, description="Budget band, e.g. '$5k-$10k / month'")
    channels: ChannelSets = Field(default_factory=ChannelSets)


class AudienceSegment(ContextModel):
    name: str = ""
    description: str = ""
    channels: List[str] = Field(default_factory=list)
    messaging: str = ""


class GoToMarketStrategy(ContextModel):
    segments: List[AudienceSegment] = Field(default_factory=list)
    competitive_advantage: str = ""
    market_position: str = ""


class LengthPreferences(ContextModel):
    blog: int = Field(DEFAULT_LENGTH_PREFERENCES["blog"], ge=0, description="Blog post word count")
    social: int = Field(DEFAULT_LENGTH_PREFERENCES["social"], ge=0, description="Social post character count")
    email: int = Field(DEFAULT_LENGTH_PREFERENCES["email"], ge=0, description="Email word count")


class ContentPreferences(ContextModel):
    content_types: List[str] = Field(default_factory=list)
    length_preferences: LengthPreferences = Field(default_factory=LengthPreferences)
    style_guidelines: List[str] = Field(default_factory=list)


class AIPersonaConfig(ContextModel):
    """How the AI assistant should behave when writing for the company."""

    personality_traits: List[str] = Field(default_factory=list)
    communication_pattern: str = ""
    knowledge_areas: List[str] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)


class Metadata(ContextModel):
    version: str = SCHEMA_VERSION
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    mcp_compatible: bool = True

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Snapshots written without an offset are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ContextDocument(ContextModel):
    """The complete context document owned by a ``ContextStore``.

    Instances are frozen. Build the next version of a document with
    ``model_copy(update=...)`` or ``revise_document`` and hand it to
    ``ContextStore.save``.
    """

    company: Company = Field(default_factory=Company)
    brand_identity: BrandIdentity = Field(default_factory=BrandIdentity, alias="brandDNA")
    marketing_goals: MarketingGoals = Field(default_factory=MarketingGoals)
    gtm_strategy: GoToMarketStrategy = Field(default_factory=GoToMarketStrategy)
    content_preferences: ContentPreferences = Field(default_factory=ContentPreferences)
    ai_persona: AIPersonaConfig = Field(default_factory=AIPersonaConfig)
    metadata: Metadata = Field(default_factory=Metadata)


# Top-level keys a full snapshot must carry, in snapshot (alias) form
DOCUMENT_SECTIONS = [
    field.alias or name for name, field in ContextDocument.model_fields.items()
]
