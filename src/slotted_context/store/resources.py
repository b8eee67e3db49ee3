"""URI-addressed views of context document sections for AI tooling."""

from typing import List, Optional

from ..models.context_document import ContextDocument
from ..models.resources import ContextResource


def build_resources(document: Optional[ContextDocument]) -> List[ContextResource]:
    """
    Publish each major section of ``document`` as a ``ContextResource``.

    Returns an empty list when there is no document.
    """
    if document is None:
        return []

    name = document.company.name or "the company"
    updated_at = document.metadata.updated_at.isoformat()

    def dump(section) -> dict:
        return section.model_dump(mode="json", by_alias=True)

    return [
        ContextResource(
            uri="company://profile",
            name="Company Profile",
            description=f"Profile for {name}",
            metadata={"company": dump(document.company), "lastUpdated": updated_at},
        ),
        ContextResource(
            uri="company://brand-dna",
            name="Brand DNA",
            description=f"Brand DNA and voice guidelines for {name}",
            metadata={"brandDNA": dump(document.brand_identity)},
        ),
        ContextResource(
            uri="company://marketing-goals",
            name="Marketing Goals",
            description=f"Marketing goals, cadence and channels for {name}",
            metadata={
                "marketingGoals": dump(document.marketing_goals),
                "contentPreferences": dump(document.content_preferences),
            },
        ),
        ContextResource(
            uri="company://gtm-strategy",
            name="Go-To-Market Strategy",
            description=f"Audience segments and positioning for {name}",
            metadata={"gtmStrategy": dump(document.gtm_strategy)},
        ),
        ContextResource(
            uri="company://ai-persona",
            name="AI Persona",
            description=f"AI assistant persona configured for {name}",
            metadata={"aiPersona": dump(document.ai_persona)},
        ),
    ]
