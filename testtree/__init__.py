"""Build one test tree from parsed test declarations and runner results."""

from testtree.constants import ROOT_ID, TEST_ID_SEPARATOR
from testtree.identifiers import get_test_id, split_test_id
from testtree.model import SuiteNode, TestDecoration, TestFilter, TestNode, TreeNode

__all__ = [
    "ROOT_ID",
    "SuiteNode",
    "TEST_ID_SEPARATOR",
    "TestDecoration",
    "TestFilter",
    "TestNode",
    "TreeNode",
    "get_test_id",
    "split_test_id",
]
