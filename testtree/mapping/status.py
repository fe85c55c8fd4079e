"""Resolve the reconciled status of an assertion and turn it into tree data."""

from __future__ import annotations

from testtree.identifiers import get_test_id
from testtree.model import TestDecoration, TestNode
from testtree.records import (
    KNOWN_SKIP,
    AssertionResult,
    ReconciledAssertion,
    StatusSource,
)


def get_assertion_status(
    result: AssertionResult,
    file_path: str,
    reconciler: StatusSource | None = None,
) -> ReconciledAssertion | None:
    """Find the reconciled record whose title equals the assertion's full name.

    A missing reconciler, an unknown file and an unmatched title all resolve
    to ``None``.
    """
    if reconciler is None:
        return None
    records = reconciler.assertions_for_test_file(file_path) or []
    for record in records:
        if record.title == result.full_name:
            return record
    return None


def map_assertion_to_decorations(
    result: AssertionResult,
    file_path: str,
    reconciler: StatusSource | None = None,
) -> list[TestDecoration]:
    """Return a single line/message decoration, or nothing when unresolved."""
    status = get_assertion_status(result, file_path, reconciler)
    if status is None:
        return []
    return [
        TestDecoration(
            line=status.line or 0,
            message=status.terse_message or "",
        )
    ]


def map_assertion_to_test_node(
    result: AssertionResult,
    file_path: str,
    work_dir: str,
    reconciler: StatusSource | None = None,
) -> TestNode:
    """Build the test node for one assertion result.

    ``skipped`` is set only for a resolved ``KnownSkip`` status.  A resolved
    line takes precedence over the location the runner reported.
    """
    status = get_assertion_status(result, file_path, reconciler)
    line = result.location_line
    skipped = False
    if status is not None:
        if status.line is not None:
            line = status.line
        skipped = status.status == KNOWN_SKIP

    return TestNode(
        id=get_test_id(file_path, work_dir, result.full_name),
        label=result.title,
        file=file_path,
        line=line,
        skipped=skipped,
    )
