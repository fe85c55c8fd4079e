"""Group a run's assertion results into describe-block suites.

Results arrive flat, each carrying its ancestor-title chain.  Suites are
recovered by walking each chain and matching the identifier computed for
every cumulative title path, so ``["A", "B"]`` and ``["A", "C"]`` share a
single suite ``A``.
"""

from __future__ import annotations

from testtree.constants import DEFAULT_ROOT_LABEL, ROOT_ID
from testtree.identifiers import get_test_id
from testtree.mapping.folding import fold_file_into_tree
from testtree.mapping.merge import merge_nodes
from testtree.mapping.status import map_assertion_to_test_node
from testtree.model import SuiteNode, TreeNode
from testtree.records import FileResult, RunResults, StatusSource


def _find_or_add_suite(
    siblings: list[TreeNode],
    suite_id: str,
    label: str,
    file_path: str,
) -> SuiteNode:
    for node in siblings:
        if node.id == suite_id and node.type == "suite":
            return node
    suite = SuiteNode(id=suite_id, label=label, file=file_path)
    siblings.append(suite)
    return suite


def group_assertions(
    file_result: FileResult,
    work_dir: str,
    reconciler: StatusSource | None = None,
) -> list[TreeNode]:
    """Build the top-level node list of one file's results.

    Top-level tests (empty ancestor chain) come first, followed by the
    describe suites in the order their first assertion appeared.
    """
    file_path = file_result.name
    top_level: list[TreeNode] = []
    suites: list[TreeNode] = []

    for result in file_result.assertion_results:
        test = map_assertion_to_test_node(result, file_path, work_dir, reconciler)
        if not result.ancestor_titles:
            top_level.append(test)
            continue

        siblings = suites
        for depth, title in enumerate(result.ancestor_titles):
            path = " ".join(result.ancestor_titles[: depth + 1])
            suite = _find_or_add_suite(
                siblings,
                get_test_id(file_path, work_dir, path),
                title,
                file_path,
            )
            siblings = suite.children
        siblings.append(test)

    return top_level + suites


def map_file_result(
    file_result: FileResult,
    work_dir: str,
    reconciler: StatusSource | None = None,
) -> SuiteNode:
    """Map one file's results to its folded directory chain."""
    nodes = group_assertions(file_result, work_dir, reconciler)
    return fold_file_into_tree(file_result.name, work_dir, nodes)


def map_run_results(
    run_results: RunResults,
    work_dir: str,
    root_label: str = DEFAULT_ROOT_LABEL,
    reconciler: StatusSource | None = None,
) -> SuiteNode:
    """Map a whole run to a root suite, merging files that share directories."""
    folded: list[TreeNode] = [
        map_file_result(file_result, work_dir, reconciler)
        for file_result in run_results.test_results
    ]
    return SuiteNode(
        id=ROOT_ID,
        label=root_label,
        children=merge_nodes([], folded),
    )
