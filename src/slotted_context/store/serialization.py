"""Snapshot serialization for context documents.

A snapshot is the canonical JSON text of one complete document: camelCase keys,
two-space indentation, ISO-8601 timestamps. The same format is written to the
persistence backend and offered to users as a downloadable ``.json`` file.
"""

import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from ..errors import FormatError
from ..models.context_document import DOCUMENT_SECTIONS, ContextDocument
from ..utils.logging import get_logger

logger = get_logger(__name__)

_FENCED_JSON = re.compile(r"^```(?:json)?\s*\n([\s\S]*?)\n?```$")


def dump_snapshot(document: ContextDocument) -> str:
    """Serialize a document to canonical snapshot JSON."""
    return document.model_dump_json(by_alias=True, indent=2)


def clean_snapshot_text(raw: str) -> str:
    """Strip surrounding whitespace and a markdown code fence, if present."""
    text = raw.strip()
    match = _FENCED_JSON.match(text)
    if match:
        return match.group(1).strip()
    return text


def parse_snapshot(raw: str) -> ContextDocument:
    """
    Parse snapshot text into a ``ContextDocument``.

    Args:
        raw (str): Snapshot JSON, optionally wrapped in a ```json fence

    Returns:
        ContextDocument: The validated document

    Raises:
        FormatError: If the text is not JSON, is not a JSON object, lacks one
            of the top-level document sections, or violates the schema
    """
    if not isinstance(raw, str):
        raise FormatError(f"Snapshot must be text, got {type(raw).__name__}")

    try:
        payload: Any = json.loads(clean_snapshot_text(raw))
    except json.JSONDecodeError as e:
        logger.debug(
            "Snapshot is not valid JSON",
            extra={"line": e.lineno, "column": e.colno}
        )
        raise FormatError("Invalid JSON format for context snapshot", details=str(e)) from e

    if not isinstance(payload, dict):
        raise FormatError(
            f"Context snapshot must be a JSON object, got {type(payload).__name__}"
        )

    missing = _missing_sections(payload)
    if missing:
        raise FormatError(
            "Context snapshot is missing sections: " + ", ".join(missing)
        )

    try:
        return ContextDocument.model_validate(payload)
    except ValidationError as e:
        raise FormatError(
            f"Context snapshot does not match the document schema ({e.error_count()} errors)",
            details=str(e)
        ) from e


def _missing_sections(payload: Dict[str, Any]) -> list:
    missing = []
    for alias, name in zip(DOCUMENT_SECTIONS, ContextDocument.model_fields):
        if alias not in payload and name not in payload:
            missing.append(alias)
    return missing
