"""Load/run lifecycle around the tree builders.

``TestLoader`` keeps the latest declaration tree (from exploring the project)
and the latest result tree (from a completed run).  Every load emits a
``{"type": "started"}`` event followed by exactly one ``{"type":
"finished"}`` event carrying the merged tree, or an ``errorMessage`` when
the load failed.

Loads are serialized: a reload requested while another is running waits
for it, so started/finished pairs never interleave and the last finished
event always carries the newest tree.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from typing import Any, Protocol

from testtree.discovery.explorer import Parser, create_matcher, discover_tests
from testtree.mapping.assertions import map_run_results
from testtree.mapping.merge import merge_trees
from testtree.model import SuiteNode
from testtree.records import RunResults, StatusSource

Emitter = Callable[[dict[str, Any]], None]


class LoaderSettings(Protocol):
    """The settings a loader reads; ``TreeConfig`` satisfies this."""

    @property
    def root_path(self) -> str: ...

    @property
    def test_regex(self) -> str | None: ...

    @property
    def test_match(self) -> list[str]: ...

    @property
    def root_label(self) -> str: ...


def _log_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


class TestLoader:
    """Builds, stores and emits the merged test tree."""

    def __init__(
        self,
        emit: Emitter,
        parse: Parser,
        settings: LoaderSettings,
        log: Callable[[str], None] | None = None,
    ) -> None:
        self.emit = emit
        self.parse = parse
        self.settings = settings
        self.log = log or _log_to_stderr
        self.declarations: SuiteNode | None = None
        self.results: SuiteNode | None = None
        self._lock = asyncio.Lock()

    def current_tree(self) -> SuiteNode:
        """Recompute the merged declaration + result tree."""
        return merge_trees(
            self.declarations,
            self.results,
            root_label=self.settings.root_label,
        )

    def _finish(self) -> SuiteNode:
        tree = self.current_tree()
        self.emit({"type": "finished", "suite": tree.to_dict()})
        return tree

    async def load_tests(self) -> SuiteNode | None:
        """Explore the project root and emit the merged tree.

        Any failure, including an invalid test file pattern, still ends
        the load with a finished event carrying ``errorMessage``.

        Returns:
            The merged tree, or None if exploration failed.
        """
        async with self._lock:
            self.emit({"type": "started"})
            root_path = self.settings.root_path
            self.log(f"Test discovery: loading tests from {root_path}")
            try:
                matcher = create_matcher(
                    self.settings.test_regex, self.settings.test_match,
                )
                self.declarations = await discover_tests(
                    root_path,
                    matcher,
                    self.parse,
                    root_label=self.settings.root_label,
                )
            except Exception as exc:
                self.log(f"Test discovery: failed to explore {root_path}: {exc}")
                self.emit({"type": "finished", "errorMessage": str(exc)})
                return None
            self.log("Test discovery: load complete")
            return self._finish()

    async def load_results(
        self,
        run_results: RunResults,
        reconciler: StatusSource | None = None,
    ) -> SuiteNode:
        """Map a completed run and emit the merged tree."""
        async with self._lock:
            self.emit({"type": "started"})
            self.results = map_run_results(
                run_results,
                self.settings.root_path,
                root_label=self.settings.root_label,
                reconciler=reconciler,
            )
            self.log(
                f"Test discovery: mapped results for "
                f"{len(run_results.test_results)} file(s)"
            )
            return self._finish()
