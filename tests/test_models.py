"""Tests for documents, options and result models."""

import dataclasses

import pytest

from linediff import (
    Added,
    DiffOptions,
    DiffResult,
    DiffStatistics,
    DiffUnitType,
    Document,
    InvalidOptions,
    Modified,
    Removed,
    Unchanged,
    normalize_line,
)


class TestDocument:

    def test_empty_text_has_no_lines(self):
        assert len(Document.from_text("")) == 0

    def test_splits_on_all_line_breaks(self):
        assert Document.from_text("a\r\nb\rc\nd").lines == ("a", "b", "c", "d")

    def test_keeps_empty_lines(self):
        assert Document.from_text("a\n\nb\n").lines == ("a", "", "b", "")

    def test_sequence_protocol(self):
        document = Document.from_lines(["x", "y"])
        assert list(document) == ["x", "y"]
        assert document[1] == "y"

    def test_immutable(self):
        document = Document.from_text("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            document.lines = ("b",)


class TestDiffOptions:

    def test_defaults(self):
        options = DiffOptions()
        assert options.to_dict() == {
            'ignore_whitespace': False,
            'ignore_case': False,
            'show_line_numbers': True,
            'context_lines': 3,
        }

    def test_negative_context_lines(self):
        with pytest.raises(InvalidOptions, match="non-negative"):
            DiffOptions(context_lines=-1)

    @pytest.mark.parametrize("value", ["3", 2.5, True, None])
    def test_context_lines_must_be_int(self, value):
        with pytest.raises(InvalidOptions, match="context_lines"):
            DiffOptions(context_lines=value)

    @pytest.mark.parametrize("name", ["ignore_whitespace", "ignore_case", "show_line_numbers"])
    def test_flags_must_be_bool(self, name):
        with pytest.raises(InvalidOptions, match=name):
            DiffOptions(**{name: 1})

    def test_invalid_options_is_value_error(self):
        assert issubclass(InvalidOptions, ValueError)

    def test_from_dict(self):
        options = DiffOptions.from_dict({'ignore_case': True, 'context_lines': 0})
        assert options == DiffOptions(ignore_case=True, context_lines=0)

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(InvalidOptions, match="view_mode"):
            DiffOptions.from_dict({'view_mode': 'unified'})

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DiffOptions().ignore_case = True


class TestNormalizeLine:

    def test_no_options_is_identity(self):
        assert normalize_line("  MiXeD  ", DiffOptions()) == "  MiXeD  "

    def test_ignore_whitespace_strips_ends_only(self):
        options = DiffOptions(ignore_whitespace=True)
        assert normalize_line("\t a  b \r", options) == "a  b"

    def test_ignore_case(self):
        assert normalize_line(" AbC", DiffOptions(ignore_case=True)) == " abc"

    def test_both(self):
        options = DiffOptions(ignore_whitespace=True, ignore_case=True)
        assert normalize_line("  HeLLo  ", options) == "hello"


class TestDiffUnits:

    def test_kinds(self):
        assert Added(1, "a").kind is DiffUnitType.ADDED
        assert Removed(1, "a").kind is DiffUnitType.REMOVED
        assert Unchanged(1, 1, "a").kind is DiffUnitType.UNCHANGED
        assert Modified(1, 1, "a", "b").kind is DiffUnitType.MODIFIED

    def test_single_sided_units_report_missing_side(self):
        assert Added(3, "a").old_line_number is None
        assert Removed(3, "a").new_line_number is None

    def test_kind_is_not_a_field(self):
        assert [f.name for f in dataclasses.fields(Added)] == ['new_line_number', 'content']
        assert [f.name for f in dataclasses.fields(Unchanged)] == [
            'old_line_number', 'new_line_number', 'content'
        ]

    def test_units_require_both_sides(self):
        with pytest.raises(TypeError):
            Unchanged(1, "a")

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Modified(1, 1, "a", "b").new_content = "c"


class TestDiffStatistics:

    def test_total_and_changes(self):
        stats = DiffStatistics(added=1, removed=2, modified=3, unchanged=4)
        assert stats.total == 10
        assert stats.total_changes == 6
        assert stats.similarity_ratio == pytest.approx(0.4)
        assert str(stats) == "+1 -2 ~3 =4"


class TestDiffResult:

    def test_iter_changes(self):
        units = (Unchanged(1, 1, "a"), Added(2, "b"), Removed(2, "c"))
        result = DiffResult(units=units, stats=DiffStatistics(added=1, removed=1, unchanged=1))
        assert list(result.iter_changes()) == [Added(2, "b"), Removed(2, "c")]
        assert result.has_differences
        assert len(result) == 3

    def test_identical(self):
        result = DiffResult(units=(Unchanged(1, 1, "a"),), stats=DiffStatistics(unchanged=1))
        assert result.is_identical
