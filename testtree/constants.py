"""Process-wide constants shared by the tree builders and the explorer."""

from __future__ import annotations

# Separates the file part of a test identifier from its test-name regex.
TEST_ID_SEPARATOR = "#@#"

# Identifier of the synthetic root suite.
ROOT_ID = "root"

# Default label of the root suite (names the runner).
DEFAULT_ROOT_LABEL = "Jest"

# Entry names never explored when searching for tests.  Only universally
# recognized names belong here.
IGNORE_GLOBS: tuple[str, ...] = (
    "node_modules",
)

# Label given to flat test blocks that were declared without a name
UNNAMED_TEST_LABEL = "test has no name"
