"""Pull a unified diff out of a generated response.

The generation service answers either with a JSON object carrying a
``diff`` key or with free text containing a fenced block tagged ``diff``,
optionally with a ``filename="..."`` attribute::

    ```diff filename="lib/main.dart"
    --- a/lib/main.dart
    +++ b/lib/main.dart
    @@ -1 +1 @@
    -old
    +new
    ```
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import List, Optional

from patchwise.diff.parser import target_path
from patchwise.errors import NoDiffFound

_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})\s*(.*)$")
_FILENAME_ATTR_RE = re.compile(r"""filename=(?:"([^"]+)"|'([^']+)'|(\S+))""")
_HUNK_MARKER_RE = re.compile(r"^@@ -\d", re.MULTILINE)
_DIFF_TAGS = ("diff", "patch", "udiff")


@dataclass(frozen=True)
class ExtractedDiff:
    """Diff body plus the filename the response attributed it to."""

    body: str
    filename: Optional[str] = None


def _filename_from_info(info: str) -> Optional[str]:
    m = _FILENAME_ATTR_RE.search(info)
    if m is None:
        return None
    return next(g for g in m.groups() if g)


def _from_json(text: str) -> Optional[str]:
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        data = json.loads(stripped)
    except ValueError:
        return None
    diff = data.get("diff") if isinstance(data, dict) else None
    return diff if isinstance(diff, str) and diff.strip() else None


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(fence) and set(stripped) == {fence[0]}


def _from_fence(text: str) -> Optional[ExtractedDiff]:
    """Return the first fenced block tagged as a diff."""
    lines = text.splitlines()
    idx = 0
    while idx < len(lines):
        m = _FENCE_RE.match(lines[idx])
        idx += 1
        if m is None:
            continue
        fence, info = m.group(1), m.group(2).strip()
        body: List[str] = []
        while idx < len(lines) and not _closes(lines[idx], fence):
            body.append(lines[idx])
            idx += 1
        idx += 1  # closing fence
        tag = info.split(maxsplit=1)[0].lower() if info else ""
        if tag in _DIFF_TAGS:
            return ExtractedDiff(
                body="\n".join(body) + "\n" if body else "",
                filename=_filename_from_info(info),
            )
    return None


def extract_diff(response_text: str) -> ExtractedDiff:
    """Extract the diff body and filename from *response_text*.

    Raises NoDiffFound when nothing diff-shaped is present.
    """
    json_diff = _from_json(response_text)
    if json_diff is not None:
        response_text = json_diff

    extracted = _from_fence(response_text)
    if extracted is None:
        if not _HUNK_MARKER_RE.search(response_text):
            raise NoDiffFound("Response does not contain a unified diff")
        extracted = ExtractedDiff(body=response_text)

    if extracted.filename is None:
        extracted = ExtractedDiff(body=extracted.body, filename=target_path(extracted.body))
    return extracted
