"""Shared test fixtures — sample documents, diffs, generated responses."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_source() -> str:
    """A small Python file used as the patch target."""
    return textwrap.dedent("""\
        import os
        import sys

        def main():
            print("hello")
            return 0
    """)


@pytest.fixture
def sample_diff_replace() -> str:
    """Replace the print call in sample_source, with file headers."""
    return textwrap.dedent("""\
        --- a/app.py
        +++ b/app.py
        @@ -4,3 +4,3 @@
         def main():
        -    print("hello")
        +    print("goodbye")
             return 0
    """)


@pytest.fixture
def sample_diff_mismatch() -> str:
    """A diff whose deletion does not match sample_source."""
    return textwrap.dedent("""\
        --- a/app.py
        +++ b/app.py
        @@ -5,1 +5,1 @@
        -    print("howdy")
        +    print("goodbye")
    """)


@pytest.fixture
def ten_lines() -> str:
    return "".join(f"l{i}\n" for i in range(1, 11))


@pytest.fixture
def sample_diff_two_hunks() -> str:
    """Two hunks at disjoint ranges of ten_lines."""
    return textwrap.dedent("""\
        @@ -2,1 +2,1 @@
        -l2
        +L2
        @@ -8,1 +8,2 @@
        -l8
        +L8
        +L8b
    """)


@pytest.fixture
def sample_response(sample_diff_replace: str) -> str:
    """Free-form generated answer embedding a tagged diff block."""
    return (
        "Here is the change you asked for.\n\n"
        '```diff filename="app.py"\n'
        f"{sample_diff_replace}"
        "```\n\n"
        "Let me know if you need anything else.\n"
    )


@pytest.fixture
def app_file(tmp_path: Path, sample_source: str) -> Path:
    """sample_source written to tmp_path/app.py."""
    path = tmp_path / "app.py"
    path.write_text(sample_source, encoding="utf-8")
    return path
