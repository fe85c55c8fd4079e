"""Translate selected node identifiers back into runner include patterns."""

from __future__ import annotations

from testtree.constants import ROOT_ID, TEST_ID_SEPARATOR
from testtree.identifiers import split_test_id
from testtree.model import TestFilter

# A pattern that matches nothing: an empty selection runs no tests.
MATCH_NOTHING = "(?!)"


def map_test_ids_to_test_filter(test_ids: list[str]) -> TestFilter | None:
    """Build the file-name and test-name patterns for a selection.

    Callers pass either only test ids or only file/directory ids; the first
    id decides which.  The translation is total and never raises:

    - any ``"root"`` id: ``None``, meaning run everything;
    - an empty selection: a file pattern that matches nothing;
    - test mode: file parts and name parts become two alternations.  A
      file id mixed in contributes ``.*`` as its name part;
    - file mode: the ids become one file alternation.  A test id mixed in
      contributes only its file part.

    Mixed selections therefore run a superset of what was selected.
    """
    if ROOT_ID in test_ids:
        return None
    if not test_ids:
        return TestFilter(test_file_name_pattern=MATCH_NOTHING)

    if TEST_ID_SEPARATOR in test_ids[0]:
        file_parts: list[str] = []
        name_parts: list[str] = []
        for test_id in test_ids:
            file_part, name_part = split_test_id(test_id)
            file_parts.append(file_part)
            name_parts.append(name_part if name_part is not None else ".*")
        return TestFilter(
            test_file_name_pattern=f"({'|'.join(file_parts)})",
            test_name_pattern=f"({'|'.join(name_parts)})",
        )

    paths = [split_test_id(test_id)[0] for test_id in test_ids]
    return TestFilter(test_file_name_pattern=f"({'|'.join(paths)})")
