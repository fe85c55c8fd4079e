"""Input records produced by the collaborators around the tree builders.

Three shapes enter the core:

* ``ParsedNode`` / ``ParseResult``: the declaration tree a source parser
  returns for one file (``describe``/``it`` blocks with start lines).
* ``AssertionResult`` / ``FileResult`` / ``RunResults``: the results of a
  completed run, in the shape ``jest --json`` writes.
* ``ReconciledAssertion``: one reconciled status record, looked up by test
  title to enrich nodes with skip state, line and failure message.

The ``from_dict`` constructors accept the camelCase JSON keys emitted by the
runner and its editor-support parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


# Reconciled status kinds
KNOWN_SUCCESS = "KnownSuccess"
KNOWN_FAIL = "KnownFail"
KNOWN_SKIP = "KnownSkip"
UNKNOWN = "Unknown"

STATUS_KINDS = frozenset({KNOWN_SUCCESS, KNOWN_FAIL, KNOWN_SKIP, UNKNOWN})


class ParseError(ValueError):
    """Raised by a parser when a source file cannot be parsed."""


def _start_line(data: dict[str, Any]) -> int | None:
    start = data.get("start")
    if isinstance(start, dict) and start.get("line") is not None:
        return int(start["line"])
    if data.get("start_line") is not None:
        return int(data["start_line"])
    return None


@dataclass
class ParsedNode:
    """A declaration node: ``it``, ``describe``, ``root`` or anything else."""

    type: str
    name: str = ""
    start_line: int | None = None
    children: list[ParsedNode] = field(default_factory=list)
    file: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsedNode:
        return cls(
            type=data.get("type", ""),
            name=data.get("name") or "",
            start_line=_start_line(data),
            children=[cls.from_dict(c) for c in data.get("children") or []],
            file=data.get("file") or "",
        )


@dataclass
class ParseResult:
    """Everything a parser found in one file."""

    file: str
    root: ParsedNode = field(default_factory=lambda: ParsedNode(type="root"))
    it_blocks: list[ParsedNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParseResult:
        file = data.get("file", "")
        root_data = data.get("root")
        root = (
            ParsedNode.from_dict(root_data)
            if isinstance(root_data, dict)
            else ParsedNode(type="root")
        )
        it_blocks = []
        for block in data.get("itBlocks") or []:
            node = ParsedNode.from_dict({"type": "it", **block})
            it_blocks.append(node)
        return cls(file=file, root=root, it_blocks=it_blocks)


@dataclass
class AssertionResult:
    """The outcome of one executed test."""

    title: str
    full_name: str
    ancestor_titles: list[str] = field(default_factory=list)
    status: str = ""
    failure_messages: list[str] = field(default_factory=list)
    location_line: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AssertionResult:
        title = data.get("title", "")
        ancestors = list(data.get("ancestorTitles") or [])
        full_name = data.get("fullName") or " ".join(ancestors + [title])
        location = data.get("location")
        line = None
        if isinstance(location, dict) and location.get("line") is not None:
            line = int(location["line"])
        return cls(
            title=title,
            full_name=full_name,
            ancestor_titles=ancestors,
            status=data.get("status", ""),
            failure_messages=list(data.get("failureMessages") or []),
            location_line=line,
        )


@dataclass
class FileResult:
    """The results reported for one test file."""

    name: str
    assertion_results: list[AssertionResult] = field(default_factory=list)
    status: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileResult:
        return cls(
            name=data.get("name", ""),
            assertion_results=[
                AssertionResult.from_dict(a)
                for a in data.get("assertionResults") or []
            ],
            status=data.get("status", ""),
            message=data.get("message") or "",
        )


@dataclass
class RunResults:
    """A complete run: one ``FileResult`` per executed test file."""

    test_results: list[FileResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunResults:
        """Build from a ``jest --json`` document or a ``{"results": ...}`` wrapper."""
        if "testResults" not in data and isinstance(data.get("results"), dict):
            data = data["results"]
        return cls(
            test_results=[
                FileResult.from_dict(r) for r in data.get("testResults") or []
            ],
        )


@dataclass
class ReconciledAssertion:
    """A reconciled status record for one test title."""

    title: str
    status: str = UNKNOWN
    line: int | None = None
    terse_message: str | None = None
    message: str | None = None


class StatusSource(Protocol):
    """Anything that can return reconciled statuses for a file."""

    def assertions_for_test_file(
        self, file_path: str,
    ) -> list[ReconciledAssertion] | None: ...
