"""Tree builders: declaration and result mapping, merging and filters."""

from testtree.mapping.assertions import group_assertions, map_file_result, map_run_results
from testtree.mapping.declarations import classify_file, classify_node, map_parse_results
from testtree.mapping.filters import map_test_ids_to_test_filter
from testtree.mapping.folding import fold_file_into_tree
from testtree.mapping.merge import merge_nodes, merge_trees
from testtree.mapping.status import (
    get_assertion_status,
    map_assertion_to_decorations,
    map_assertion_to_test_node,
)

__all__ = [
    "classify_file",
    "classify_node",
    "fold_file_into_tree",
    "get_assertion_status",
    "group_assertions",
    "map_assertion_to_decorations",
    "map_assertion_to_test_node",
    "map_file_result",
    "map_parse_results",
    "map_run_results",
    "map_test_ids_to_test_filter",
    "merge_nodes",
    "merge_trees",
]
