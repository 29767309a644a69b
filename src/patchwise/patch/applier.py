"""Patch applier — walks the classified diff and builds one edit batch.

Line numbers are computed against the original document and the edits
are applied in a single ``apply_batch`` call, so earlier edits never shift
the positions of later ones. Any failure is raised before the document is
touched.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Set

from patchwise.config.schema import ApplyConfig
from patchwise.diff.models import DeleteLine, InsertText, LineKind
from patchwise.diff.parser import HunkStreamParser
from patchwise.errors import (
    ApplyFailed,
    DocumentOutOfRange,
    MissingHunkHeader,
    PatchError,
    PatchMismatch,
)
from patchwise.patch.document import TargetDocument
from patchwise.patch.result import EditPlan, PatchResult

logger = logging.getLogger(__name__)


def _same(stored: str, expected: str, trim: bool) -> bool:
    if trim:
        return stored.strip() == expected.strip()
    return stored == expected


def _check_line(document: TargetDocument, cursor: int, expected: str, trim: bool) -> None:
    """Raise unless the document line at *cursor* matches *expected*."""
    if cursor >= document.line_count():
        raise DocumentOutOfRange(cursor, document.line_count())
    actual = document.line_at(cursor)
    if not _same(actual, expected, trim):
        raise PatchMismatch(cursor, expected, actual)


def build_edits(
    document: TargetDocument,
    diff_text: str,
    *,
    options: Optional[ApplyConfig] = None,
) -> EditPlan:
    """Validate *diff_text* against *document* and return the edit plan.

    Raises MalformedHunkHeader, MissingHunkHeader, PatchMismatch or
    DocumentOutOfRange, or ApplyFailed when two hunks delete the same line.
    The document is only read.
    """
    options = options or ApplyConfig()
    trim = options.trim_whitespace
    plan = EditPlan()
    cursor: Optional[int] = None
    deleted: Set[int] = set()

    for item in HunkStreamParser(diff_text).parse():
        if item.kind is LineKind.HUNK_HEADER:
            assert item.header is not None
            header = item.header
            cursor = header.anchor
            total = document.line_count()
            if cursor > total or (header.old_count > 0 and cursor >= total):
                raise DocumentOutOfRange(cursor, total)
            plan.hunks += 1
            logger.debug("Hunk %d anchored at line %d: %s", plan.hunks, cursor + 1, item.text)
            continue

        if item.kind is LineKind.FILE_HEADER:
            continue

        if cursor is None:
            raise MissingHunkHeader(item.line_no)

        if item.kind is LineKind.DELETION:
            _check_line(document, cursor, item.text, trim)
            if cursor in deleted:
                raise ApplyFailed(f"line {cursor + 1} deleted twice by overlapping hunks")
            deleted.add(cursor)
            plan.edits.append(DeleteLine(cursor))
            cursor += 1
        elif item.kind is LineKind.ADDITION:
            if cursor > document.line_count():
                raise DocumentOutOfRange(cursor, document.line_count())
            plan.edits.append(InsertText(cursor, item.text))
        else:
            if options.strict_context:
                _check_line(document, cursor, item.text, trim)
            cursor += 1

    logger.debug(
        "Planned %d edits (%d deletions, %d insertions) across %d hunks",
        len(plan.edits), plan.deleted, plan.inserted, plan.hunks,
    )
    return plan


def apply_patch(
    document: TargetDocument,
    diff_text: str,
    *,
    options: Optional[ApplyConfig] = None,
    dry_run: bool = False,
    path: Optional[str] = None,
) -> PatchResult:
    """Apply *diff_text* to *document* as one all-or-nothing batch.

    Returns a PatchResult; raises a PatchError subclass on any failure, in
    which case the document is unchanged.
    """
    start = time.perf_counter()
    try:
        plan = build_edits(document, diff_text, options=options)
        applied = False
        if plan.edits and not dry_run:
            document.apply_batch(plan.edits)
            applied = True
    except PatchError as exc:
        logger.debug("Patch rejected: %s", exc)
        raise

    result = PatchResult(
        plan=plan,
        applied=applied,
        dry_run=dry_run,
        path=path,
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    logger.info(
        "%s %d edits%s",
        "Applied" if applied else "Planned",
        len(plan.edits),
        f" to {path}" if path else "",
    )
    return result
