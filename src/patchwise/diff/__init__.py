"""Diff layer — line classification, extraction, inversion, models."""

from patchwise.diff.extract import ExtractedDiff, extract_diff
from patchwise.diff.invert import invert
from patchwise.diff.models import (
    ClassifiedLine,
    DeleteLine,
    EditOperation,
    HunkHeader,
    InsertText,
    LineKind,
)
from patchwise.diff.parser import (
    HunkStreamParser,
    classify,
    hunk_headers,
    parse_hunk_header,
    target_path,
)

__all__ = [
    "ClassifiedLine",
    "DeleteLine",
    "EditOperation",
    "ExtractedDiff",
    "HunkHeader",
    "HunkStreamParser",
    "InsertText",
    "LineKind",
    "classify",
    "extract_diff",
    "hunk_headers",
    "invert",
    "parse_hunk_header",
    "target_path",
]
