"""Write a test tree (and its decorations) as a YAML or JSON report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from testtree.model import SuiteNode, TestDecoration


def tree_to_report(
    root: SuiteNode,
    decorations: dict[str, list[TestDecoration]] | None = None,
) -> dict[str, Any]:
    """Build the report dict for a tree.

    Args:
        root: The root suite.
        decorations: Optional decorations keyed by test id.  Tests without
            decorations are left out.

    Returns:
        ``{"suite": ...}`` plus ``"decorations"`` when any were given.
    """
    report: dict[str, Any] = {"suite": root.to_dict()}
    if decorations:
        report["decorations"] = {
            test_id: [d.to_dict() for d in items]
            for test_id, items in decorations.items()
            if items
        }
    return report


def write_yaml(report: dict[str, Any], path: Path) -> None:
    """Write the report as a YAML file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(
            report,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def write_json(report: dict[str, Any], path: Path) -> None:
    """Write the report as a JSON file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(report, f, indent=2)
        f.write("\n")


def dump_report(report: dict[str, Any], fmt: str) -> str:
    """Render the report as a YAML or JSON string."""
    if fmt == "yaml":
        return yaml.dump(
            report,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    if fmt == "json":
        return json.dumps(report, indent=2) + "\n"
    raise ValueError(f"Unknown report format: {fmt}")


def load_report(path: Path) -> dict[str, Any] | None:
    """Load a report written by ``write_yaml`` or ``write_json``.

    Returns None if the file is missing or not valid YAML/JSON.
    """
    if not path.exists():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError):
        return None
    return data if isinstance(data, dict) else None
