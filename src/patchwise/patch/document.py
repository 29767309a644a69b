"""Target documents — the capability the applier reads from and edits.

Edits are expressed against the document's *original* line numbers and
land as one batch: either every operation takes effect or none does.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, List, Protocol, Sequence, Set, Union

from patchwise.diff.models import DeleteLine, EditOperation, InsertText
from patchwise.errors import ApplyFailed, DocumentOutOfRange

logger = logging.getLogger(__name__)


class TargetDocument(Protocol):
    """What the applier needs from a document it does not own."""

    def line_at(self, index: int) -> str: ...

    def line_count(self) -> int: ...

    def apply_batch(self, ops: Sequence[EditOperation]) -> None: ...


class TextDocument:
    """In-memory list-of-lines document.

    Remembers its line ending and whether the text ended with a newline so
    that ``text`` round-trips the original byte-for-byte when untouched.
    """

    def __init__(
        self,
        lines: Sequence[str] = (),
        *,
        newline: str = "\n",
        final_newline: bool = True,
    ) -> None:
        self._lines: List[str] = list(lines)
        self.newline = newline
        self.final_newline = final_newline
        self.version = 0

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        newline = "\r\n" if "\r\n" in text else "\n"
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        if newline == "\r\n":
            lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        return cls(lines, newline=newline, final_newline=text.endswith("\n") or not text)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        if not self._lines:
            return ""
        body = self.newline.join(self._lines)
        return body + self.newline if self.final_newline else body

    def line_at(self, index: int) -> str:
        if index < 0 or index >= len(self._lines):
            raise DocumentOutOfRange(index, len(self._lines))
        return self._lines[index]

    def line_count(self) -> int:
        return len(self._lines)

    def apply_batch(self, ops: Sequence[EditOperation]) -> None:
        """Apply *ops* atomically. Raises ApplyFailed, leaving lines as they were."""
        self._lines = _rebuild(self._lines, ops)
        self.version += 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(lines={len(self._lines)}, version={self.version})"


def _rebuild(original: List[str], ops: Sequence[EditOperation]) -> List[str]:
    """Return the new line list; *original* is never touched.

    Deletions at a line happen before insertions recorded at the same line,
    and insertions at one line keep their list order.
    """
    total = len(original)
    deleted: Set[int] = set()
    inserts: Dict[int, List[str]] = {}

    for op in ops:
        if isinstance(op, DeleteLine):
            if not 0 <= op.line < total:
                raise ApplyFailed(DocumentOutOfRange(op.line, total))
            if op.line in deleted:
                raise ApplyFailed(f"line {op.line + 1} deleted twice")
            deleted.add(op.line)
        elif isinstance(op, InsertText):
            if not 0 <= op.line <= total:
                raise ApplyFailed(DocumentOutOfRange(op.line, total))
            inserts.setdefault(op.line, []).append(op.text)
        else:
            raise ApplyFailed(f"unknown edit operation: {op!r}")

    result: List[str] = []
    for idx in range(total + 1):
        result.extend(inserts.get(idx, ()))
        if idx < total and idx not in deleted:
            result.append(original[idx])
    return result


class FileDocument(TextDocument):
    """A TextDocument backed by a file on disk.

    ``apply_batch`` writes through a temporary sibling file and
    ``os.replace`` so readers see either the old or the new content.
    """

    def __init__(self, path: Union[str, Path], *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding
        try:
            with open(self.path, encoding=encoding, newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ApplyFailed(exc) from exc
        loaded = TextDocument.from_text(text)
        super().__init__(
            loaded.lines, newline=loaded.newline, final_newline=loaded.final_newline
        )

    def apply_batch(self, ops: Sequence[EditOperation]) -> None:
        before = self._lines
        super().apply_batch(ops)
        try:
            self._write()
        except (OSError, UnicodeError) as exc:
            self._lines = before
            self.version -= 1
            raise ApplyFailed(exc) from exc
        logger.debug("Wrote %d lines to %s", len(self._lines), self.path)

    def _write(self) -> None:
        mode = stat.S_IMODE(self.path.stat().st_mode)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(self.text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
        except (OSError, UnicodeError):
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
