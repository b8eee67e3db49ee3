"""
Utility functions for building new versions of a context document.

The store only ever accepts complete documents, so consumers that want to
change a handful of fields read the current document, merge their changes over
it and save the result. This module provides helpers for that pattern:
- Deep-merging nested dictionaries without mutating either input
- Turning a dotted field path into a nested change set
- Producing a revised ``ContextDocument`` from a current one plus changes

Example:
    ```python
    current = store.get_current()

    # Change the cadence and primary channels in one revision
    revised = revise_document(current, {
        "marketingGoals": {
            "cadence": "monthly",
            "channels": {"primary": ["LinkedIn", "Email"]},
        }
    })
    await store.save(revised)
    ```
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from ..models.context_document import ContextDocument


def deep_merge(base: Mapping[str, Any], changes: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``changes`` over ``base`` recursively and return a new dictionary.

    Nested mappings are merged key by key; every other value in ``changes``
    (lists included) replaces the value in ``base`` outright.

    Args:
        base: The original values
        changes: Values to apply on top of ``base``

    Returns:
        Dict[str, Any]: A new dictionary; neither input is modified
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in changes.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def changes_from_path(path: str, value: Any) -> Dict[str, Any]:
    """
    Build a nested change set from a dotted path.

    Example:
        ```python
        changes_from_path("brandDNA.brandColors.primary", "#ff0000")
        # {"brandDNA": {"brandColors": {"primary": "#ff0000"}}}
        ```
    """
    keys = [key for key in path.split(".") if key]
    if not keys:
        raise ValueError("Field path must not be empty")

    changes: Dict[str, Any] = {keys[-1]: value}
    for key in reversed(keys[:-1]):
        changes = {key: changes}
    return changes


def split_list_value(value: str) -> List[str]:
    """Split a comma separated value into trimmed, non-empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def revise_document(
    document: Optional[ContextDocument],
    changes: Union[Mapping[str, Any], ContextDocument],
) -> ContextDocument:
    """
    Return a new document with ``changes`` merged over ``document``.

    Changes are keyed the way snapshots are (camelCase, ``brandDNA`` for the
    brand identity section). Metadata is carried over from ``document``; the
    store stamps timestamps when the revision is saved.

    Args:
        document: The document to revise, or None to start from defaults
        changes: Nested field changes in snapshot form

    Returns:
        ContextDocument: The validated revision

    Raises:
        pydantic.ValidationError: If the merged result is not a valid document
    """
    if isinstance(changes, ContextDocument):
        changes = changes.model_dump(mode="json", by_alias=True, exclude_unset=True)

    base = (document or ContextDocument()).model_dump(mode="json", by_alias=True)
    merged = deep_merge(base, changes)
    merged["metadata"] = base["metadata"]
    return ContextDocument.model_validate(merged)
