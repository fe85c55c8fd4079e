"""Reconciled statuses per test file, built from completed runs.

Each file's records are replaced wholesale whenever a run reports that file.
A file that was never reported returns ``None`` ("no run yet"); a reported
file with no assertions returns an empty list.  Both resolve as lookup
misses when building the tree.
"""

from __future__ import annotations

import re

from testtree.records import (
    KNOWN_FAIL,
    KNOWN_SKIP,
    KNOWN_SUCCESS,
    UNKNOWN,
    AssertionResult,
    ReconciledAssertion,
    RunResults,
)

# Runner assertion status -> reconciled status kind
STATUS_MAP: dict[str, str] = {
    "passed": KNOWN_SUCCESS,
    "failed": KNOWN_FAIL,
    "pending": KNOWN_SKIP,
    "skipped": KNOWN_SKIP,
    "todo": KNOWN_SKIP,
    "disabled": KNOWN_SKIP,
}

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _terse_message(failure_messages: list[str]) -> str | None:
    """Return the first non-empty line of the failure messages."""
    for message in failure_messages:
        for line in _ANSI_ESCAPE.sub("", message).splitlines():
            if line.strip():
                return line.strip()
    return None


def _failure_line(file_path: str, failure_messages: list[str]) -> int | None:
    """Return the line of the first stack frame pointing into *file_path*."""
    frame = re.compile(re.escape(file_path) + r":(\d+):\d+")
    for message in failure_messages:
        match = frame.search(message)
        if match:
            return int(match.group(1))
    return None


def reconcile_assertion(
    result: AssertionResult,
    file_path: str,
) -> ReconciledAssertion:
    """Convert one assertion result to its reconciled record."""
    line = result.location_line
    if line is None:
        line = _failure_line(file_path, result.failure_messages)
    message = "\n".join(result.failure_messages) or None
    return ReconciledAssertion(
        title=result.full_name,
        status=STATUS_MAP.get(result.status, UNKNOWN),
        line=line,
        terse_message=_terse_message(result.failure_messages),
        message=message,
    )


class ResultsReconciler:
    """In-memory reconciled-status source keyed by file path."""

    def __init__(self) -> None:
        self._files: dict[str, list[ReconciledAssertion]] = {}

    def update_file_with_results(self, run_results: RunResults) -> list[str]:
        """Replace the records of every file in *run_results*.

        Returns:
            The file paths that were updated, in report order.
        """
        updated: list[str] = []
        for file_result in run_results.test_results:
            self._files[file_result.name] = [
                reconcile_assertion(result, file_result.name)
                for result in file_result.assertion_results
            ]
            updated.append(file_result.name)
        return updated

    def assertions_for_test_file(
        self, file_path: str,
    ) -> list[ReconciledAssertion] | None:
        """Return the records for *file_path*, or None if never reported."""
        records = self._files.get(file_path)
        return list(records) if records is not None else None

    def remove_file(self, file_path: str) -> None:
        """Forget a file's records."""
        self._files.pop(file_path, None)

    @property
    def files(self) -> list[str]:
        """Paths of every reported file."""
        return list(self._files)
