from typing import Literal, Optional
from pydantic import BaseModel, Field

ContentType = Literal["blog", "script", "social", "email", "gtm-strategy", "campaign-topics"]


class ContentRequest(BaseModel):
    """A request for marketing content, handed to an AI generation collaborator."""

    content_type: ContentType = Field(..., description="Kind of content to generate")
    topic: Optional[str] = Field(None, description="Content topic or theme")
    length: Optional[int] = Field(None, gt=0, description="Desired length; words, or characters for social")
    tone: Optional[str] = Field(None, description="Tone override for this piece")
    custom_instructions: Optional[str] = Field(None, description="Additional free-form instructions")
