"""Patch plan and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from patchwise.diff.models import DeleteLine, EditOperation, InsertText


@dataclass
class EditPlan:
    """Edits computed against the original document, not yet applied."""

    edits: List[EditOperation] = field(default_factory=list)
    hunks: int = 0

    @property
    def deleted(self) -> int:
        return sum(1 for e in self.edits if isinstance(e, DeleteLine))

    @property
    def inserted(self) -> int:
        return sum(1 for e in self.edits if isinstance(e, InsertText))

    @property
    def is_noop(self) -> bool:
        return not self.edits


@dataclass
class PatchResult:
    """Complete result of one patch-apply call."""

    plan: EditPlan = field(default_factory=EditPlan)
    applied: bool = False
    dry_run: bool = False
    path: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def edits(self) -> List[EditOperation]:
        return self.plan.edits

    @property
    def hunks(self) -> int:
        return self.plan.hunks

    @property
    def deleted(self) -> int:
        return self.plan.deleted

    @property
    def inserted(self) -> int:
        return self.plan.inserted
