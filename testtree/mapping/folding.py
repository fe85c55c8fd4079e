"""Fold a file's directory path into nested directory suites."""

from __future__ import annotations

from testtree.identifiers import strip_work_dir
from testtree.model import SuiteNode, TreeNode


def fold_file_into_tree(
    file_path: str,
    work_dir: str,
    children: list[TreeNode],
) -> SuiteNode:
    """Wrap a file's nodes in one suite per directory level.

    The innermost suite represents the file itself (id = relative path,
    label = file name).  Each enclosing directory, up to but excluding the
    working directory, becomes a suite whose id is the cumulative relative
    path and whose only child is the level below it.  Empty path segments
    (leading or trailing separators) do not produce a level.

    Args:
        file_path: Absolute path of the test file.
        work_dir: Working directory the identifiers are relative to.
        children: The test/suite nodes discovered in the file.

    Returns:
        The outermost directory suite, or the file suite when the file sits
        directly in the working directory.
    """
    relative = strip_work_dir(file_path, work_dir)
    segments = relative.split("/")

    current = SuiteNode(
        id=relative,
        label=segments[-1],
        children=list(children),
        file=file_path,
    )

    for index in range(len(segments) - 2, -1, -1):
        segment = segments[index]
        if not segment:
            continue
        current = SuiteNode(
            id="/".join(segments[: index + 1]),
            label=segment,
            children=[current],
        )

    return current
