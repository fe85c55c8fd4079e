"""Stable identifiers for files and tests.

A file's identifier is its path relative to the working directory with
forward slashes.  A test's identifier appends ``TEST_ID_SEPARATOR`` and the
test's full title as an anchored, escaped regular expression, so the part
after the separator can be handed back to the runner verbatim.
"""

from __future__ import annotations

import re

from testtree.constants import TEST_ID_SEPARATOR

_REGEXP_SPECIAL = re.compile(r"[.*+?^${}()|\[\]\\]")


def escape_regexp(text: str) -> str:
    """Backslash-escape regular expression metacharacters in *text*.

    Only ``. * + ? ^ $ { } ( ) | [ ] \\`` are escaped, so the result is a
    valid pattern for both Python and JavaScript regex engines.
    """
    return _REGEXP_SPECIAL.sub(lambda m: "\\" + m.group(0), text)


def strip_work_dir(file_path: str, work_dir: str) -> str:
    """Remove a leading *work_dir* from *file_path* and normalize separators.

    The prefix is matched case-insensitively and only on a whole path
    segment: ``/proj`` is stripped from ``/proj/a.js`` but not from
    ``/project/a.js``.  If it is absent the path is returned with only
    separators normalized, so stripping twice is safe.

    Args:
        file_path: Absolute (or already relative) file path.
        work_dir: Working directory the identifiers are relative to.

    Returns:
        The root-relative path with ``/`` separators.
    """
    prefix = work_dir.rstrip("/\\")
    if prefix:
        pattern = re.compile(
            "^" + re.escape(prefix) + r"(?=[/\\]|$)", re.IGNORECASE,
        )
        file_path = pattern.sub("", file_path, count=1)
    return file_path.replace("\\", "/")


def get_test_id(
    file_path: str,
    work_dir: str,
    test_name: str | None = None,
) -> str:
    """Build the identifier of a file, or of a test within that file."""
    relative = strip_work_dir(file_path, work_dir)
    if test_name is None:
        return relative
    return f"{relative}{TEST_ID_SEPARATOR}^{escape_regexp(test_name)}$"


def split_test_id(test_id: str) -> tuple[str, str | None]:
    """Split an identifier into its file part and test-name pattern.

    Returns ``(file_part, None)`` for identifiers without a separator.
    """
    if TEST_ID_SEPARATOR not in test_id:
        return test_id, None
    file_part, name_part = test_id.split(TEST_ID_SEPARATOR, 1)
    return file_part, name_part
