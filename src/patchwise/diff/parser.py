"""Hunk stream parser — classifies every line of a unified diff.

There is no intermediate AST: the applier consumes the ClassifiedLine
stream directly, in source order. Handles CRLF diffs, git extended
headers, ``\\ No newline at end of file`` markers and every hunk header
count variation.
"""

from __future__ import annotations

import re
from typing import Generator, List, Optional

from patchwise.diff.models import ClassifiedLine, HunkHeader, LineKind
from patchwise.errors import MalformedHunkHeader, MissingHunkHeader

# --- Regex patterns for diff parsing ---

_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(?: ?(.*))?$"
)
_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_INDEX_RE = re.compile(r"^index [0-9a-f]+\.\.[0-9a-f]+")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")
_EXTENDED_HEADER_RE = re.compile(
    r"^(?:new file mode \d+|deleted file mode \d+|old mode \d+|new mode \d+"
    r"|similarity index \d+%|rename from .+|rename to .+)$"
)
_FILE_HEADER_PATH_RE = re.compile(r"^(?:---|\+\+\+) (\S+)")


def _split_lines(diff_text: str) -> List[str]:
    """Split on LF only, dropping the empty tail left by a final newline."""
    if not diff_text:
        return []
    lines = diff_text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _is_file_header(line: str, in_hunk: bool = False) -> bool:
    # '---' / '+++' must be tested before the single '-' / '+' markers.
    if line.startswith("---") or line.startswith("+++"):
        return True
    if _NO_NEWLINE_RE.match(line) or _DIFF_HEADER_RE.match(line):
        return True
    # Inside a hunk, "index ..." or "rename from ..." is file content.
    if in_hunk:
        return False
    return bool(_INDEX_RE.match(line) or _EXTENDED_HEADER_RE.match(line))


def parse_hunk_header(line: str, line_no: int = 0) -> HunkHeader:
    """Parse a single ``@@`` line. Raises MalformedHunkHeader."""
    m = _HUNK_HEADER_RE.match(line)
    if m is None:
        raise MalformedHunkHeader(line_no, line)
    old_start = int(m.group(1))
    old_count = int(m.group(2)) if m.group(2) is not None else 1
    new_start = int(m.group(3))
    new_count = int(m.group(4)) if m.group(4) is not None else 1
    # Start 0 is only meaningful for an empty side ("-0,0").
    if old_start < 1 and old_count != 0:
        raise MalformedHunkHeader(line_no, line)
    return HunkHeader(
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
        section=(m.group(5) or "").strip(),
    )


class HunkStreamParser:
    """Turn unified diff text into a stream of ClassifiedLine objects.

    Usage::

        for item in HunkStreamParser(diff_text).parse():
            if item.kind is LineKind.DELETION:
                ...
    """

    def __init__(self, diff_text: str) -> None:
        self._lines = _split_lines(diff_text)

    def parse(self) -> Generator[ClassifiedLine, None, None]:
        """Yield one ClassifiedLine per physical line, in source order."""
        seen_header = False
        in_hunk = False

        for idx, raw_line in enumerate(self._lines):
            line_no = idx + 1

            # --- Hunk header ---
            if raw_line.startswith("@@"):
                header = parse_hunk_header(raw_line, line_no)
                seen_header = True
                in_hunk = True
                yield ClassifiedLine(
                    kind=LineKind.HUNK_HEADER,
                    text=raw_line,
                    line_no=line_no,
                    header=header,
                )
                continue

            # --- File headers and git metadata → noise ---
            if _is_file_header(raw_line, in_hunk):
                if _DIFF_HEADER_RE.match(raw_line):
                    in_hunk = False
                yield ClassifiedLine(kind=LineKind.FILE_HEADER, text=raw_line, line_no=line_no)
                continue

            # --- Content lines ---
            if raw_line.startswith("-"):
                kind = LineKind.DELETION
                content = raw_line[1:]
            elif raw_line.startswith("+"):
                kind = LineKind.ADDITION
                content = raw_line[1:]
            else:
                kind = LineKind.CONTEXT
                content = raw_line[1:] if raw_line.startswith(" ") else raw_line

            if not seen_header:
                raise MissingHunkHeader(line_no)

            yield ClassifiedLine(kind=kind, text=content, line_no=line_no)


def classify(diff_text: str) -> Generator[ClassifiedLine, None, None]:
    """Shorthand for ``HunkStreamParser(diff_text).parse()``."""
    return HunkStreamParser(diff_text).parse()


def hunk_headers(diff_text: str) -> List[HunkHeader]:
    """Return every hunk header in *diff_text*, in order."""
    return [
        item.header
        for item in classify(diff_text)
        if item.kind is LineKind.HUNK_HEADER and item.header is not None
    ]


def _strip_path_prefix(path: str) -> str:
    if path.startswith("a/") or path.startswith("b/"):
        return path[2:]
    return path


def target_path(diff_text: str) -> Optional[str]:
    """Return the file a diff names in its ``+++`` (or ``---``) header.

    ``/dev/null`` is ignored. Returns None when the diff carries no file
    headers; the applier never uses this, callers do to find the document.
    """
    old_path: Optional[str] = None
    for line in _split_lines(diff_text):
        if line.startswith("@@"):
            break
        m = _FILE_HEADER_PATH_RE.match(line)
        if m is None or m.group(1) == "/dev/null":
            continue
        if line.startswith("+++"):
            return _strip_path_prefix(m.group(1))
        old_path = old_path or _strip_path_prefix(m.group(1))
    return old_path
