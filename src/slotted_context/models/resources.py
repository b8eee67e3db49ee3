from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ContextResource(BaseModel):
    """A read-only, URI-addressed view of one section of the context document."""

    uri: str = Field(..., description="Resource URI, e.g. company://profile")
    name: str = Field(..., description="Human readable resource name")
    description: str = Field(..., description="What the resource contains")
    mime_type: Optional[str] = Field("application/json", description="Payload MIME type")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Section payload")
