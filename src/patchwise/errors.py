"""Patch failure taxonomy.

Every failure is terminal for the patch call that raised it. Attributes keep
0-indexed document line numbers; messages show 1-indexed lines.
"""

from __future__ import annotations

from typing import Optional


class PatchError(Exception):
    """Base class for all failures raised while parsing or applying a diff."""

    code = "patch_error"


class MalformedHunkHeader(PatchError):
    """An ``@@`` line did not match the hunk header grammar."""

    code = "malformed_hunk_header"

    def __init__(self, line_no: int, text: str) -> None:
        self.line_no = line_no
        self.text = text
        super().__init__(f"Malformed hunk header on diff line {line_no}: {text!r}")


class MissingHunkHeader(PatchError):
    """Content appeared before any ``@@`` header, so it has no anchor."""

    code = "missing_hunk_header"

    def __init__(self, line_no: int) -> None:
        self.line_no = line_no
        super().__init__(f"Diff line {line_no} has no preceding hunk header")


class PatchMismatch(PatchError):
    """A deletion (or strict context) line disagrees with the document."""

    code = "patch_mismatch"

    def __init__(self, line: int, expected: str, actual: str) -> None:
        self.line = line
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Patch does not apply at line {line + 1}: "
            f"expected {expected!r}, found {actual!r}"
        )


class DocumentOutOfRange(PatchError):
    """The cursor pointed past the end of the document."""

    code = "document_out_of_range"

    def __init__(self, line: int, line_count: Optional[int] = None) -> None:
        self.line = line
        self.line_count = line_count
        detail = f" (document has {line_count} lines)" if line_count is not None else ""
        super().__init__(f"Line {line + 1} is outside the document{detail}")


class ApplyFailed(PatchError):
    """The document rejected the edit batch; nothing was changed."""

    code = "apply_failed"

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Failed to apply edits: {cause}")


class NoDiffFound(PatchError):
    """No unified diff could be extracted from a generated response."""

    code = "no_diff_found"
