"""Build the inverse of an existing unified diff (``patch -R``)."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from patchwise.diff.models import ClassifiedLine, LineKind
from patchwise.diff.parser import classify

_PREFIX_SWAP = {"a/": "b/", "b/": "a/"}


def _swap_path(path: str) -> str:
    prefix = path[:2]
    if prefix in _PREFIX_SWAP:
        return _PREFIX_SWAP[prefix] + path[2:]
    return path


def invert(diff_text: str) -> str:
    """Return a diff that undoes *diff_text*.

    Deletions become additions and vice versa, header start/count pairs are
    swapped, and ``---``/``+++`` headers trade places. Inside each run of
    changed lines the new deletions are emitted before the new additions.
    """
    out: List[str] = []
    removed: List[str] = []
    added: List[str] = []
    pending_old: Optional[str] = None

    def flush() -> None:
        out.extend("-" + text for text in added)
        out.extend("+" + text for text in removed)
        removed.clear()
        added.clear()

    for item in classify(diff_text):
        if item.kind is LineKind.DELETION:
            removed.append(item.text)
            continue
        if item.kind is LineKind.ADDITION:
            added.append(item.text)
            continue

        flush()
        if item.kind is LineKind.CONTEXT:
            out.append(" " + item.text)
        elif item.kind is LineKind.HUNK_HEADER:
            if pending_old is not None:
                out.append("+++ " + _swap_path(pending_old))
                pending_old = None
            out.append(_invert_header(item))
        elif item.text.startswith("--- "):
            pending_old = item.text[4:]
        elif item.text.startswith("+++ ") and pending_old is not None:
            out.append("--- " + _swap_path(item.text[4:]))
            out.append("+++ " + _swap_path(pending_old))
            pending_old = None
        else:
            out.append(item.text)

    flush()
    if pending_old is not None:
        out.append("+++ " + _swap_path(pending_old))
    return "\n".join(out) + "\n" if out else ""


def _invert_header(item: ClassifiedLine) -> str:
    h = item.header
    assert h is not None
    swapped = replace(
        h,
        old_start=h.new_start,
        old_count=h.new_count,
        new_start=h.old_start,
        new_count=h.old_count,
    )
    return swapped.render()
