"""Tree data model shared by the declaration and result mappers.

A tree is built from two node kinds forming a tagged union on ``type``:
``SuiteNode`` (``type == "suite"``) and ``TestNode`` (``type == "test"``).
Consumers branch on ``node.type``; they never probe for a ``children``
attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union


@dataclass
class TestNode:
    """A single test (leaf)."""

    id: str
    label: str
    file: str
    line: int | None = None
    skipped: bool = False
    type: Literal["test"] = "test"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's ``{id, label, file, line?, ...}`` shape."""
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "file": self.file,
        }
        if self.line is not None:
            data["line"] = self.line
        data["skipped"] = self.skipped
        data["type"] = self.type
        return data


@dataclass
class SuiteNode:
    """A group of tests: root, directory, file or describe block."""

    id: str
    label: str
    children: list[TreeNode] = field(default_factory=list)
    file: str | None = None
    line: int | None = None
    type: Literal["suite"] = "suite"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's nested dict shape, recursing into children."""
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
        }
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        data["type"] = self.type
        data["children"] = [child.to_dict() for child in self.children]
        return data

    def iter_ids(self) -> list[str]:
        """Return the ids of every descendant, depth-first, self excluded."""
        ids: list[str] = []
        for child in self.children:
            ids.append(child.id)
            if child.type == "suite":
                ids.extend(child.iter_ids())
        return ids


TreeNode = Union[SuiteNode, TestNode]


@dataclass(frozen=True)
class TestDecoration:
    """An inline annotation (line + message) attached to a test."""

    line: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "message": self.message}


@dataclass(frozen=True)
class TestFilter:
    """Runner-level include patterns built from selected node ids."""

    test_file_name_pattern: str
    test_name_pattern: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"testFileNamePattern": self.test_file_name_pattern}
        if self.test_name_pattern is not None:
            data["testNamePattern"] = self.test_name_pattern
        return data
