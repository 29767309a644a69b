"""JSON reporter for editor integrations and scripts."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from patchwise.diff.models import DeleteLine
from patchwise.errors import (
    ApplyFailed,
    DocumentOutOfRange,
    MalformedHunkHeader,
    MissingHunkHeader,
    PatchError,
    PatchMismatch,
)
from patchwise.patch.result import PatchResult


def to_dict(result: PatchResult) -> Dict[str, Any]:
    """Convert a PatchResult to a JSON-serialisable dict."""
    edits: List[Dict[str, Any]] = []
    for e in result.edits:
        if isinstance(e, DeleteLine):
            edits.append({"op": "delete", "line": e.line})
        else:
            edits.append({"op": "insert", "line": e.line, "text": e.text})

    return {
        "version": "1.0",
        "ok": True,
        "path": result.path,
        "applied": result.applied,
        "dry_run": result.dry_run,
        "hunks": result.hunks,
        "deleted": result.deleted,
        "inserted": result.inserted,
        "edits": edits,
        "duration_ms": round(result.duration_ms, 3),
    }


def error_to_dict(error: PatchError, *, path: str | None = None) -> Dict[str, Any]:
    """Describe a patch failure; line numbers stay 0-indexed."""
    detail: Dict[str, Any] = {}
    if isinstance(error, PatchMismatch):
        detail = {"line": error.line, "expected": error.expected, "actual": error.actual}
    elif isinstance(error, DocumentOutOfRange):
        detail = {"line": error.line, "line_count": error.line_count}
    elif isinstance(error, MalformedHunkHeader):
        detail = {"diff_line": error.line_no, "text": error.text}
    elif isinstance(error, MissingHunkHeader):
        detail = {"diff_line": error.line_no}
    elif isinstance(error, ApplyFailed):
        detail = {"cause": str(error.cause)}

    return {
        "version": "1.0",
        "ok": False,
        "path": path,
        "applied": False,
        "error": {"code": error.code, "message": str(error), **detail},
    }


def render(result: PatchResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)


def render_error(error: PatchError, *, path: str | None = None) -> str:
    return json.dumps(error_to_dict(error, path=path), indent=2)
