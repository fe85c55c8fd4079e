"""Test discovery: asynchronous directory exploration and the load lifecycle."""

from testtree.discovery.explorer import (
    create_matcher,
    discover_tests,
    explore_directory,
    explore_file,
)
from testtree.discovery.loader import TestLoader

__all__ = [
    "TestLoader",
    "create_matcher",
    "discover_tests",
    "explore_directory",
    "explore_file",
]
