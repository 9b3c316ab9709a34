"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest

FIXED_TAG = "20240115103000"


@pytest.fixture
def timestamp_tag() -> str:
    """Fixed run timestamp tag for deterministic archive names."""
    return FIXED_TAG


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small source tree with one nested file.

    Layout::

        source/
            file1.txt          "Hello, world!"
            subdir/
                file2.txt      "Hello, subdir!"
    """
    root = tmp_path / "source"
    (root / "subdir").mkdir(parents=True)
    (root / "file1.txt").write_text("Hello, world!")
    (root / "subdir" / "file2.txt").write_text("Hello, subdir!")
    return root
