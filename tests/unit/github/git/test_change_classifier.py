"""Tests for calculate_additions_and_deletions."""

import pytest

from verified_sync.github.errors import ParseError
from verified_sync.github.git.status import calculate_additions_and_deletions, list_changes
from verified_sync.github.models.types import ChangeRecord


def record(code: str, path: str) -> ChangeRecord:
    return ChangeRecord(file_path=path, index_status=code[0], working_tree_status=code[1])


class TestCalculateAdditionsAndDeletions:
    """Test classification of status records."""

    def test_working_tree_modification_is_addition(self):
        change_set = calculate_additions_and_deletions(list_changes(" M file1.txt\n"))

        assert change_set.additions == ["file1.txt"]
        assert change_set.deletions == []

    def test_rename_splits_into_deletion_and_addition(self):
        change_set = calculate_additions_and_deletions(
            list_changes("R  file3.txt -> file3renamed.txt\n")
        )

        assert change_set.additions == ["file3renamed.txt"]
        assert change_set.deletions == ["file3.txt"]

    def test_working_tree_rename(self):
        """Test a rename in the working tree column is also split."""
        change_set = calculate_additions_and_deletions([record(" R", "a.txt -> b.txt")])

        assert change_set.additions == ["b.txt"]
        assert change_set.deletions == ["a.txt"]

    def test_renamed_and_modified_is_only_split(self):
        """Test a rename record skips the addition and deletion rules."""
        change_set = calculate_additions_and_deletions([record("RM", "old.txt -> new.txt")])

        assert change_set.additions == ["new.txt"]
        assert change_set.deletions == ["old.txt"]

    def test_rename_without_separator_raises(self):
        with pytest.raises(ParseError):
            calculate_additions_and_deletions([record("R ", "no-separator.txt")])

    def test_full_report(self):
        """Test the ordering of a mixed report."""
        output = (
            " M file1.txt\n"
            " D file2.txt\n"
            "R  file3.txt -> file3renamed.txt\n"
            " T file4.txt\n"
            "A  file5.txt\n"
            "?? untracked.txt\n"
        )

        change_set = calculate_additions_and_deletions(list_changes(output))

        assert change_set.additions == [
            "file1.txt",
            "file3renamed.txt",
            "file4.txt",
            "file5.txt",
            "untracked.txt",
        ]
        assert change_set.deletions == ["file2.txt", "file3.txt"]

    @pytest.mark.parametrize(
        "code",
        ["M ", "A ", "T ", "??", " M", " T", "MM", "AM"],
    )
    def test_addition_codes(self, code):
        change_set = calculate_additions_and_deletions([record(code, "f.txt")])

        assert change_set.additions == ["f.txt"]
        assert change_set.deletions == []

    @pytest.mark.parametrize("code", ["D ", " D"])
    def test_deletion_codes(self, code):
        change_set = calculate_additions_and_deletions([record(code, "f.txt")])

        assert change_set.additions == []
        assert change_set.deletions == ["f.txt"]

    @pytest.mark.parametrize("code", ["!!", "UU", "C ", "  "])
    def test_other_codes_are_ignored(self, code):
        change_set = calculate_additions_and_deletions([record(code, "f.txt")])

        assert change_set.additions == []
        assert change_set.deletions == []

    @pytest.mark.parametrize("code", ["MD", "AD"])
    def test_addition_and_deletion_rules_are_independent(self, code):
        """Test a record matching both rules lands in both lists.

        Staged-then-deleted files report e.g. "AD"; both rules apply and
        the path is both added and deleted.
        """
        change_set = calculate_additions_and_deletions([record(code, "f.txt")])

        assert change_set.additions == ["f.txt"]
        assert change_set.deletions == ["f.txt"]

    def test_duplicates_are_kept(self):
        change_set = calculate_additions_and_deletions(
            [record(" M", "f.txt"), record(" M", "f.txt")]
        )

        assert change_set.additions == ["f.txt", "f.txt"]


class TestQuotedPaths:
    """Test paths git reports in C-style quotes."""

    def test_path_with_space(self):
        change_set = calculate_additions_and_deletions(list_changes('?? "my file.txt"\n'))

        assert change_set.additions == ["my file.txt"]

    @pytest.mark.parametrize(
        "quoted, path",
        [
            (r'"caf\303\251.txt"', "café.txt"),
            (r'"say \"hi\".txt"', 'say "hi".txt'),
            (r'"tab\there.txt"', "tab\there.txt"),
            (r'"back\\slash.txt"', "back\\slash.txt"),
        ],
    )
    def test_escapes_are_decoded(self, quoted, path):
        change_set = calculate_additions_and_deletions([record(" D", quoted)])

        assert change_set.deletions == [path]

    def test_quoted_rename_halves(self):
        change_set = calculate_additions_and_deletions(
            list_changes('R  "old name.txt" -> "new name.txt"\n')
        )

        assert change_set.deletions == ["old name.txt"]
        assert change_set.additions == ["new name.txt"]

    def test_separator_inside_quoted_old_path(self):
        change_set = calculate_additions_and_deletions(
            [record("R ", '"a -> b.txt" -> c.txt')]
        )

        assert change_set.deletions == ["a -> b.txt"]
        assert change_set.additions == ["c.txt"]

    def test_unknown_escape_raises(self):
        with pytest.raises(ParseError):
            calculate_additions_and_deletions([record("??", r'"bad\q.txt"')])

    def test_parser_keeps_quotes(self):
        """Test records keep git's text so they re-serialize unchanged."""
        records = list_changes('?? "my file.txt"\n')

        assert records[0].file_path == '"my file.txt"'
        assert records[0].to_porcelain_line() == '?? "my file.txt"'
