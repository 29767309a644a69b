"""Patch layer — edit planning, atomic application, documents, results."""

from patchwise.patch.applier import apply_patch, build_edits
from patchwise.patch.document import FileDocument, TargetDocument, TextDocument
from patchwise.patch.result import EditPlan, PatchResult

__all__ = [
    "EditPlan",
    "FileDocument",
    "PatchResult",
    "TargetDocument",
    "TextDocument",
    "apply_patch",
    "build_edits",
]
