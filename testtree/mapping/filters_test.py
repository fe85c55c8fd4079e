"""Unit tests for translating selected ids into runner filters."""

from __future__ import annotations

import re

from testtree.constants import TEST_ID_SEPARATOR
from testtree.identifiers import get_test_id
from testtree.mapping.filters import MATCH_NOTHING, map_test_ids_to_test_filter

SEP = TEST_ID_SEPARATOR


class TestMapTestIdsToTestFilter:
    """Tests for map_test_ids_to_test_filter."""

    def test_root_means_no_filter(self):
        assert map_test_ids_to_test_filter(["root"]) is None

    def test_root_among_others_means_no_filter(self):
        """Selecting the root runs everything whatever else is selected."""
        assert map_test_ids_to_test_filter(["/a.js", "root"]) is None

    def test_test_ids(self):
        """Test ids split into a file alternation and a name alternation."""
        test_filter = map_test_ids_to_test_filter([
            f"/a/b.test.ts{SEP}^foo$",
            f"/a/b.test.ts{SEP}^bar$",
        ])
        assert test_filter is not None
        assert test_filter.test_file_name_pattern == "(/a/b.test.ts|/a/b.test.ts)"
        assert test_filter.test_name_pattern == "(^foo$|^bar$)"

        file_re = re.compile(test_filter.test_file_name_pattern)
        name_re = re.compile(test_filter.test_name_pattern)
        assert file_re.search("/a/b.test.ts")
        assert not file_re.search("/a/c.test.ts")
        assert name_re.search("foo")
        assert name_re.search("bar")
        assert not name_re.search("foobar")
        assert not name_re.search("baz")

    def test_escaped_titles_round_trip(self):
        """Ids built from titles with metacharacters match those titles exactly."""
        title = "handles (a|b) [x]"
        test_id = get_test_id("/p/a.test.js", "/p", title)
        test_filter = map_test_ids_to_test_filter([test_id])
        name_re = re.compile(test_filter.test_name_pattern)
        assert name_re.search(title)
        assert not name_re.search("handles a")

    def test_file_ids(self):
        """File and directory ids become a single file alternation."""
        test_filter = map_test_ids_to_test_filter(["/src", "/lib/x.test.js"])
        assert test_filter is not None
        assert test_filter.test_file_name_pattern == "(/src|/lib/x.test.js)"
        assert test_filter.test_name_pattern is None

    def test_empty_selection_matches_nothing(self):
        """An empty selection runs nothing rather than everything."""
        test_filter = map_test_ids_to_test_filter([])
        assert test_filter is not None
        assert test_filter.test_file_name_pattern == MATCH_NOTHING
        assert not re.search(test_filter.test_file_name_pattern, "/a.test.js")

    def test_mixed_test_first(self):
        """A file id in a test selection runs every test of that file."""
        test_filter = map_test_ids_to_test_filter([f"/a.js{SEP}^x$", "/b.js"])
        assert test_filter.test_file_name_pattern == "(/a.js|/b.js)"
        assert test_filter.test_name_pattern == "(^x$|.*)"

    def test_mixed_file_first(self):
        """A test id in a file selection contributes only its file."""
        test_filter = map_test_ids_to_test_filter(["/b.js", f"/a.js{SEP}^x$"])
        assert test_filter.test_file_name_pattern == "(/b.js|/a.js)"
        assert test_filter.test_name_pattern is None

    def test_to_dict(self):
        test_filter = map_test_ids_to_test_filter([f"/a.js{SEP}^x$"])
        assert test_filter.to_dict() == {
            "testFileNamePattern": "(/a.js)",
            "testNamePattern": "(^x$)",
        }
        assert map_test_ids_to_test_filter(["/a.js"]).to_dict() == {
            "testFileNamePattern": "(/a.js)",
        }
