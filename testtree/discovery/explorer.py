"""Explore a directory tree for test files and build the declaration tree.

Directory listing, stat calls and file parsing are blocking, so they run in
the event loop's default executor.  Entries of a directory are evaluated
concurrently with ``asyncio.gather``; each evaluation returns its own list
of folded file chains and the lists are merged only after the gather
completes.
"""

from __future__ import annotations

import asyncio
import os
import re
import stat
import sys
from collections.abc import Callable

from wcmatch import glob

from testtree.constants import DEFAULT_ROOT_LABEL, IGNORE_GLOBS, ROOT_ID
from testtree.identifiers import get_test_id
from testtree.mapping.declarations import classify_file
from testtree.mapping.folding import fold_file_into_tree
from testtree.mapping.merge import merge_nodes
from testtree.model import SuiteNode, TreeNode
from testtree.records import ParsedNode

Matcher = Callable[[str], bool]
Parser = Callable[[str], ParsedNode]

GLOB_FLAGS = glob.GLOBSTAR | glob.EXTGLOB | glob.BRACE | glob.DOTGLOB


def _glob_path(path: str) -> str:
    """Drop the drive and leading separators so ``**/`` can match from the top."""
    _, tail = os.path.splitdrive(path.replace("\\", "/"))
    return tail.lstrip("/")


def create_matcher(
    test_regex: str | None = None,
    test_match: list[str] | None = None,
) -> Matcher:
    """Create a predicate telling whether a file path should be explored.

    A regular expression is searched anywhere in the path.  Otherwise the
    path must match at least one glob.  Globs follow the runner's dialect:
    ``**`` spans directories, ``?(x)``/``+(a|b)`` extended patterns and
    ``{a,b}`` braces are understood, and dot-directories match like any other.

    Raises:
        re.error: If *test_regex* is not a valid regular expression.
    """
    if test_regex:
        regex = re.compile(test_regex)
        return lambda value: regex.search(value) is not None
    patterns = list(test_match or [])
    if not patterns:
        return lambda value: False
    return lambda value: glob.globmatch(_glob_path(value), patterns, flags=GLOB_FLAGS)


def is_ignored(name: str) -> bool:
    """Return True if a directory entry name matches a global ignore glob."""
    return glob.globmatch(name, list(IGNORE_GLOBS), flags=GLOB_FLAGS)


async def _run_blocking(func, *args):
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func, *args)


async def get_directory_contents(directory: str) -> list[str]:
    """List a directory as absolute paths, sorted, without ignored entries.

    Raises:
        OSError: If the directory cannot be read.
    """
    names = await _run_blocking(os.listdir, directory)
    return [
        os.path.join(directory, name)
        for name in sorted(names)
        if not is_ignored(name)
    ]


async def explore_file(
    file_path: str,
    parse: Parser,
    work_dir: str,
) -> list[TreeNode]:
    """Parse one test file and fold its declarations into a directory chain.

    A file the parser rejects contributes nothing; a warning is printed.
    Any exception from the parser other than ``OSError`` counts as a
    rejection.  ``OSError`` propagates.
    """
    try:
        parsed = await _run_blocking(parse, file_path)
    except OSError:
        raise
    except Exception as exc:
        print(
            f"Test discovery: could not parse {file_path}, skipping: "
            f"{type(exc).__name__}: {exc}",
            file=sys.stderr,
        )
        return []

    nodes = classify_file(file_path, parsed, work_dir)
    if not nodes:
        return []
    return [fold_file_into_tree(file_path, work_dir, nodes)]


async def _evaluate_path(
    path: str,
    matcher: Matcher,
    parse: Parser,
    work_dir: str,
) -> list[TreeNode]:
    """Explore a directory recursively, or a matching file; else nothing."""
    st = await _run_blocking(os.stat, path)
    if stat.S_ISDIR(st.st_mode):
        return await _explore_entries(path, matcher, parse, work_dir)
    if matcher(path):
        return await explore_file(path, parse, work_dir)
    return []


async def _explore_entries(
    directory: str,
    matcher: Matcher,
    parse: Parser,
    work_dir: str,
) -> list[TreeNode]:
    contents = await get_directory_contents(directory)
    subtrees = await asyncio.gather(
        *(_evaluate_path(path, matcher, parse, work_dir) for path in contents)
    )
    children: list[TreeNode] = []
    for subtree in subtrees:
        children = merge_nodes(children, subtree)
    return children


async def explore_directory(
    directory: str,
    matcher: Matcher,
    parse: Parser,
    work_dir: str | None = None,
) -> SuiteNode:
    """Explore *directory* recursively and return the suite representing it.

    The suite's children are the merged directory chains of every test file
    found below it, with ids relative to *work_dir* (defaults to
    *directory*).  Directories without tests and non-matching files are
    left out.

    Args:
        directory: The directory to explore.
        matcher: Predicate selecting test files by absolute path.
        parse: Parser returning a file's root declaration node.
        work_dir: Working directory the identifiers are relative to.

    Raises:
        OSError: If a directory or file cannot be read.
    """
    if work_dir is None:
        work_dir = directory
    children = await _explore_entries(directory, matcher, parse, work_dir)
    return SuiteNode(
        id=get_test_id(directory, work_dir),
        label=os.path.basename(os.path.normpath(directory)),
        children=children,
        file=directory,
    )


async def discover_tests(
    root_path: str,
    matcher: Matcher,
    parse: Parser,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> SuiteNode:
    """Explore *root_path* and wrap the result in the ``"root"`` suite."""
    suite = await explore_directory(root_path, matcher, parse)
    return SuiteNode(id=ROOT_ID, label=root_label, children=suite.children)
