"""Tree report output: YAML and JSON files."""

from testtree.reporting.writer import load_report, tree_to_report, write_json, write_yaml

__all__ = [
    "load_report",
    "tree_to_report",
    "write_json",
    "write_yaml",
]
