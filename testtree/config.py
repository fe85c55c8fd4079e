"""Tree discovery configuration.

Reads the .testtree_config JSON file that tells discovery where the project
root is and which files contain tests.  Test files are selected either by a
single regular expression (``test_regex``) or by a list of globs in the
runner's dialect (``test_match``); the regular expression wins when both
are set.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from testtree.constants import DEFAULT_ROOT_LABEL
from testtree.discovery.explorer import Matcher, create_matcher

CONFIG_FILENAME = ".testtree_config"

# The runner's own testMatch defaults.
DEFAULT_TEST_MATCH = [
    "**/__tests__/**/*.[jt]s?(x)",
    "**/?(*.)+(spec|test).[jt]s?(x)",
]

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "root_path": ".",
    "test_regex": None,
    "test_match": DEFAULT_TEST_MATCH,
    "root_label": DEFAULT_ROOT_LABEL,
}


def read_config(path: Path | None) -> dict[str, Any]:
    """Return the file's settings over the defaults.

    A missing, unreadable or non-object file yields the defaults.
    """
    if path is None or not path.exists():
        return dict(DEFAULT_CONFIG)
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError):
        return dict(DEFAULT_CONFIG)
    if not isinstance(data, dict):
        return dict(DEFAULT_CONFIG)
    return {**DEFAULT_CONFIG, **data}


class TreeConfig:
    """Discovery settings backed by a .testtree_config file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data = read_config(path)

    @property
    def root_path(self) -> str:
        """Get the project root, resolved against the config file's directory."""
        root = Path(str(self._data.get("root_path") or "."))
        if not root.is_absolute() and self.path is not None:
            root = self.path.parent / root
        return str(root.resolve())

    @property
    def test_regex(self) -> str | None:
        """Get the test file regular expression (None = use globs)."""
        val = self._data.get("test_regex")
        return str(val) if val else None

    @property
    def test_match(self) -> list[str]:
        """Get the test file glob patterns."""
        val = self._data.get("test_match")
        if not val:
            return list(DEFAULT_TEST_MATCH)
        return [str(pattern) for pattern in val]

    @property
    def root_label(self) -> str:
        """Get the label of the root suite."""
        return str(self._data.get("root_label") or DEFAULT_ROOT_LABEL)

    def create_matcher(self) -> Matcher:
        """Build the file matcher described by this configuration."""
        return create_matcher(self.test_regex, self.test_match)
