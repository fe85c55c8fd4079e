"""Command-line entry point for building test trees.

Subcommands:

* ``results``: map a ``jest --json`` results document to a tree.
* ``discover``: explore the project root with a parser and build the
  declaration tree.
* ``filter``: turn selected node ids into runner include patterns.
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import json
import os
import re
import sys
from pathlib import Path
from typing import Any

from testtree.config import CONFIG_FILENAME, TreeConfig
from testtree.discovery.explorer import Parser, discover_tests
from testtree.identifiers import get_test_id
from testtree.mapping.assertions import map_run_results
from testtree.mapping.filters import map_test_ids_to_test_filter
from testtree.mapping.status import map_assertion_to_decorations
from testtree.model import TestDecoration
from testtree.reconciler import ResultsReconciler
from testtree.records import ParsedNode, RunResults
from testtree.reporting.writer import dump_report, tree_to_report, write_json, write_yaml


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root the ids are relative to (default: from config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to the {CONFIG_FILENAME} JSON file",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Report format (default: yaml)",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build a test tree from test declarations and results"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    results_parser = subparsers.add_parser(
        "results",
        help="Build the tree from a jest --json results file",
    )
    results_parser.add_argument(
        "results_file",
        type=Path,
        help="Path to the JSON results document",
    )
    _add_output_args(results_parser)

    discover_parser = subparsers.add_parser(
        "discover",
        help="Explore the project root and build the declaration tree",
    )
    discover_parser.add_argument(
        "--parser",
        required=True,
        help="Parser callable as MODULE:FUNCTION, called with a file path",
    )
    _add_output_args(discover_parser)

    filter_parser = subparsers.add_parser(
        "filter",
        help="Translate selected node ids into runner include patterns",
    )
    filter_parser.add_argument(
        "ids",
        nargs="+",
        help="Selected node ids",
    )

    return parser.parse_args(argv)


def load_parser(target: str) -> Parser:
    """Import a parser callable from a ``MODULE:FUNCTION`` string.

    The callable may return a ``ParsedNode`` or its dict form.

    Raises:
        ValueError: If *target* is malformed or does not name a callable.
        ImportError: If the module cannot be imported.
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Parser must be given as MODULE:FUNCTION, got {target!r}")
    module = importlib.import_module(module_name)
    func = getattr(module, attr, None)
    if not callable(func):
        raise ValueError(f"{target} is not a callable")

    def parse(file_path: str) -> ParsedNode:
        parsed = func(file_path)
        if isinstance(parsed, ParsedNode):
            return parsed
        return ParsedNode.from_dict(parsed)

    return parse


def _resolve_root(args: argparse.Namespace, config: TreeConfig) -> str:
    if args.root:
        return os.path.abspath(args.root)
    return config.root_path


def _emit_report(report: dict[str, Any], args: argparse.Namespace) -> None:
    if args.output is None:
        sys.stdout.write(dump_report(report, args.format))
        return
    if args.format == "json":
        write_json(report, args.output)
    else:
        write_yaml(report, args.output)
    print(f"Report written to {args.output}")


def cmd_results(args: argparse.Namespace) -> int:
    """Map a results document to a tree with failure decorations."""
    try:
        data = json.loads(args.results_file.read_text())
    except FileNotFoundError:
        print(f"Error: Results file not found: {args.results_file}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in results file: {e}", file=sys.stderr)
        return 1
    if not isinstance(data, dict):
        print("Error: Results file must contain a JSON object", file=sys.stderr)
        return 1

    config = TreeConfig(args.config)
    work_dir = _resolve_root(args, config)
    run_results = RunResults.from_dict(data)

    reconciler = ResultsReconciler()
    reconciler.update_file_with_results(run_results)
    tree = map_run_results(
        run_results, work_dir, root_label=config.root_label, reconciler=reconciler,
    )

    decorations: dict[str, list[TestDecoration]] = {}
    for file_result in run_results.test_results:
        for result in file_result.assertion_results:
            items = [
                d for d in map_assertion_to_decorations(
                    result, file_result.name, reconciler,
                )
                if d.message
            ]
            if items:
                test_id = get_test_id(file_result.name, work_dir, result.full_name)
                decorations[test_id] = items

    _emit_report(tree_to_report(tree, decorations), args)
    return 0


def cmd_discover(args: argparse.Namespace) -> int:
    """Explore the project root and output the declaration tree."""
    try:
        parse = load_parser(args.parser)
    except (ImportError, ValueError) as e:
        print(f"Error: Could not load parser: {e}", file=sys.stderr)
        return 1

    config = TreeConfig(args.config)
    root_path = _resolve_root(args, config)
    try:
        tree = asyncio.run(
            discover_tests(
                root_path,
                config.create_matcher(),
                parse,
                root_label=config.root_label,
            )
        )
    except (OSError, re.error) as e:
        print(f"Error: Test discovery failed: {e}", file=sys.stderr)
        return 1

    _emit_report(tree_to_report(tree), args)
    return 0


def cmd_filter(args: argparse.Namespace) -> int:
    """Print the runner filter for the selected ids as JSON."""
    test_filter = map_test_ids_to_test_filter(args.ids)
    payload = test_filter.to_dict() if test_filter is not None else None
    print(json.dumps(payload))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 1

    if args.command == "results":
        return cmd_results(args)
    elif args.command == "discover":
        return cmd_discover(args)
    elif args.command == "filter":
        return cmd_filter(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
