"""Utility functions for the slotted-context package."""

from .document_utils import deep_merge, revise_document, changes_from_path

__all__ = ["deep_merge", "revise_document", "changes_from_path"]
