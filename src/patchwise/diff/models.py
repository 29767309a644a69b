"""Data models for hunk parsing and edit planning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class LineKind(str, Enum):
    HUNK_HEADER = "hunk_header"
    FILE_HEADER = "file_header"
    DELETION = "deletion"
    ADDITION = "addition"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class HunkHeader:
    """Parsed ``@@ -old_start[,old_count] +new_start[,new_count] @@`` line."""

    old_start: int
    old_count: int = 1
    new_start: int = 1
    new_count: int = 1
    section: str = ""  # trailing text after the closing '@@'

    @property
    def anchor(self) -> int:
        """0-indexed document line the hunk starts at.

        A pure-insertion hunk (``old_count == 0``) names the line *after*
        which its additions go, so its anchor is ``old_start`` itself.
        """
        if self.old_count == 0:
            return self.old_start
        return self.old_start - 1

    def render(self) -> str:
        text = f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"
        if self.section:
            text += f" {self.section}"
        return text


@dataclass(frozen=True, slots=True)
class ClassifiedLine:
    """A single physical diff line tagged with its role."""

    kind: LineKind
    text: str
    line_no: int  # 1-indexed position in the diff text
    header: Optional[HunkHeader] = None  # set on HUNK_HEADER only


@dataclass(frozen=True, slots=True)
class DeleteLine:
    """Remove the original document line at ``line`` (0-indexed)."""

    line: int


@dataclass(frozen=True, slots=True)
class InsertText:
    """Insert ``text`` as a new line before original line ``line``."""

    line: int
    text: str


EditOperation = Union[DeleteLine, InsertText]
