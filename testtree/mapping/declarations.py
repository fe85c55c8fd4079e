"""Map parsed test declarations (``describe``/``it`` blocks) into tree nodes."""

from __future__ import annotations

from collections.abc import Sequence

from testtree.constants import DEFAULT_ROOT_LABEL, ROOT_ID, UNNAMED_TEST_LABEL
from testtree.identifiers import get_test_id
from testtree.mapping.folding import fold_file_into_tree
from testtree.mapping.merge import merge_nodes
from testtree.model import SuiteNode, TestNode, TreeNode
from testtree.records import ParsedNode, ParseResult


def classify_node(
    node: ParsedNode,
    file_path: str,
    work_dir: str,
    prefix: Sequence[str] = (),
) -> TreeNode | None:
    """Recursively convert one declaration node.

    ``it`` blocks become tests and ``describe`` blocks become suites.  Any
    other node type yields ``None``.  The full title used in the identifier
    is the enclosing describe names plus the node's own name joined by a
    space, the same way the runner builds the full name it reports, so
    declaration ids line up with result ids.

    Args:
        node: The parsed node.
        file_path: Path of the file being explored.
        work_dir: Working directory the identifiers are relative to.
        prefix: Names of the enclosing describe blocks, outermost first.
    """
    title = " ".join([*prefix, node.name])
    if node.type == "it":
        return TestNode(
            id=get_test_id(file_path, work_dir, title),
            label=node.name,
            file=file_path,
            line=node.start_line,
        )
    if node.type == "describe":
        child_prefix = (*prefix, node.name)
        children = [
            child
            for child in (
                classify_node(c, file_path, work_dir, child_prefix)
                for c in node.children
            )
            if child is not None
        ]
        return SuiteNode(
            id=get_test_id(file_path, work_dir, title),
            label=node.name,
            children=children,
            file=file_path,
            line=node.start_line,
        )
    return None


def classify_file(
    file_path: str,
    parsed_root: ParsedNode,
    work_dir: str,
) -> list[TreeNode]:
    """Classify the top-level declarations of one file, in source order."""
    nodes: list[TreeNode] = []
    for child in parsed_root.children:
        classified = classify_node(child, file_path, work_dir)
        if classified is not None:
            nodes.append(classified)
    return nodes


def map_parse_results(
    parse_results: list[ParseResult],
    work_dir: str,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> SuiteNode:
    """Build a tree from flat per-file ``it`` block lists.

    Each block becomes a top-level test of its file; files without blocks
    contribute nothing.
    """
    folded: list[TreeNode] = []
    for result in parse_results:
        tests: list[TreeNode] = []
        for block in result.it_blocks:
            file_path = block.file or result.file
            name = block.name or UNNAMED_TEST_LABEL
            tests.append(TestNode(
                id=get_test_id(file_path, work_dir, name),
                label=name,
                file=file_path,
                line=block.start_line,
                skipped=False,
            ))
        if tests:
            folded.append(fold_file_into_tree(result.file, work_dir, tests))

    return SuiteNode(
        id=ROOT_ID,
        label=root_label,
        children=merge_nodes([], folded),
    )
