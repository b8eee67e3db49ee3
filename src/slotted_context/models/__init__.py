"""Models package for the Slotted context store."""

from .context_document import (
    SCHEMA_VERSION,
    DOCUMENT_SECTIONS,
    AIPersonaConfig,
    AudienceSegment,
    BrandColors,
    BrandIdentity,
    BrandTone,
    ChannelSets,
    Company,
    ContentPreferences,
    ContextDocument,
    GoToMarketStrategy,
    LengthPreferences,
    MarketingGoals,
    Metadata,
    TargetAudience,
)
from .resources import ContextResource
from .requests import ContentRequest

# Export commonly used classes at the package level
__all__ = [
    "SCHEMA_VERSION", "DOCUMENT_SECTIONS",
    "ContextDocument", "Company", "BrandIdentity", "TargetAudience", "BrandTone",
    "BrandColors", "MarketingGoals", "ChannelSets", "GoToMarketStrategy",
    "AudienceSegment", "ContentPreferences", "LengthPreferences",
    "AIPersonaConfig", "Metadata",
    "ContextResource", "ContentRequest",
]
