"""Unit tests for status resolution."""

from __future__ import annotations

from testtree.constants import TEST_ID_SEPARATOR
from testtree.mapping.status import (
    get_assertion_status,
    map_assertion_to_decorations,
    map_assertion_to_test_node,
)
from testtree.model import TestDecoration
from testtree.records import AssertionResult, ReconciledAssertion

FILE = "/proj/a.test.js"


class FakeStatusSource:
    """Returns fixed records per file and counts lookups."""

    def __init__(self, records: dict[str, list[ReconciledAssertion] | None]) -> None:
        self.records = records
        self.lookups: list[str] = []

    def assertions_for_test_file(self, file_path):
        self.lookups.append(file_path)
        return self.records.get(file_path)


def _assertion(full_name: str = "Suite works", title: str = "works", **kwargs) -> AssertionResult:
    return AssertionResult(title=title, full_name=full_name, **kwargs)


class TestGetAssertionStatus:
    """Tests for get_assertion_status."""

    def test_no_reconciler(self):
        assert get_assertion_status(_assertion(), FILE) is None

    def test_match_by_full_title(self):
        """The record whose title equals the full name is returned."""
        wanted = ReconciledAssertion(title="Suite works", status="KnownFail", line=7)
        source = FakeStatusSource({FILE: [
            ReconciledAssertion(title="works", status="KnownSuccess"),
            wanted,
        ]})
        assert get_assertion_status(_assertion(), FILE, source) is wanted
        assert source.lookups == [FILE]

    def test_no_match(self):
        source = FakeStatusSource({FILE: [ReconciledAssertion(title="other")]})
        assert get_assertion_status(_assertion(), FILE, source) is None

    def test_file_unknown(self):
        """A source returning None for the file is a lookup miss."""
        source = FakeStatusSource({})
        assert get_assertion_status(_assertion(), FILE, source) is None

    def test_file_with_zero_records(self):
        source = FakeStatusSource({FILE: []})
        assert get_assertion_status(_assertion(), FILE, source) is None


class TestMapAssertionToDecorations:
    """Tests for map_assertion_to_decorations."""

    def test_resolved(self):
        source = FakeStatusSource({FILE: [ReconciledAssertion(
            title="Suite works", status="KnownFail", line=12, terse_message="expected 1",
        )]})
        decorations = map_assertion_to_decorations(_assertion(), FILE, source)
        assert decorations == [TestDecoration(line=12, message="expected 1")]

    def test_resolved_without_line_or_message(self):
        """Missing line and message default to 0 and the empty string."""
        source = FakeStatusSource({FILE: [ReconciledAssertion(title="Suite works")]})
        decorations = map_assertion_to_decorations(_assertion(), FILE, source)
        assert decorations == [TestDecoration(line=0, message="")]

    def test_unresolved(self):
        assert map_assertion_to_decorations(_assertion(), FILE) == []
        source = FakeStatusSource({FILE: []})
        assert map_assertion_to_decorations(_assertion(), FILE, source) == []


class TestMapAssertionToTestNode:
    """Tests for map_assertion_to_test_node."""

    def test_unresolved_defaults(self):
        """Without a status the test is not skipped and has no line."""
        node = map_assertion_to_test_node(_assertion(), FILE, "/proj")
        assert node.type == "test"
        assert node.id == f"/a.test.js{TEST_ID_SEPARATOR}^Suite works$"
        assert node.label == "works"
        assert node.file == FILE
        assert node.line is None
        assert node.skipped is False

    def test_location_line_used_when_unresolved(self):
        node = map_assertion_to_test_node(_assertion(location_line=5), FILE, "/proj")
        assert node.line == 5

    def test_known_skip(self):
        source = FakeStatusSource({FILE: [
            ReconciledAssertion(title="Suite works", status="KnownSkip"),
        ]})
        node = map_assertion_to_test_node(_assertion(), FILE, "/proj", source)
        assert node.skipped is True

    def test_other_status_not_skipped(self):
        for status in ("KnownSuccess", "KnownFail", "Unknown"):
            source = FakeStatusSource({FILE: [
                ReconciledAssertion(title="Suite works", status=status),
            ]})
            node = map_assertion_to_test_node(_assertion(), FILE, "/proj", source)
            assert node.skipped is False

    def test_resolved_line_overrides(self):
        """A resolved line wins over the reported location."""
        source = FakeStatusSource({FILE: [
            ReconciledAssertion(title="Suite works", status="KnownFail", line=30),
        ]})
        node = map_assertion_to_test_node(
            _assertion(location_line=5), FILE, "/proj", source,
        )
        assert node.line == 30

    def test_resolved_without_line_keeps_location(self):
        source = FakeStatusSource({FILE: [
            ReconciledAssertion(title="Suite works", status="KnownSuccess"),
        ]})
        node = map_assertion_to_test_node(
            _assertion(location_line=5), FILE, "/proj", source,
        )
        assert node.line == 5
