"""patchwise — apply generated unified diffs to documents, line-exact and all-or-nothing."""

__version__ = "0.1.0"

from patchwise.errors import (  # noqa: E402
    ApplyFailed,
    DocumentOutOfRange,
    MalformedHunkHeader,
    MissingHunkHeader,
    NoDiffFound,
    PatchError,
    PatchMismatch,
)
from patchwise.patch import (  # noqa: E402
    FileDocument,
    PatchResult,
    TargetDocument,
    TextDocument,
    apply_patch,
    build_edits,
)

__all__ = [
    "ApplyFailed",
    "DocumentOutOfRange",
    "FileDocument",
    "MalformedHunkHeader",
    "MissingHunkHeader",
    "NoDiffFound",
    "PatchError",
    "PatchMismatch",
    "PatchResult",
    "TargetDocument",
    "TextDocument",
    "__version__",
    "apply_patch",
    "build_edits",
]
