"""Unit tests for whitespace inference.

WHY: infer_space decides every gap in stripped reconstruction. Each of
the four token-kind branches has its own override rule, and a wrong rule
glues words together or doubles spaces.

HOW: Each branch is tested on its own with distinct marker strings
("X", "Y", ...) so it is obvious which recorded space survived.
"""

import pytest

from sentence_model.core.spacing import infer_space, infer_space_between, merge_spaces
from sentence_model.core.tokens import Tag, TagType, Token, Word


def _tag(tag_type, left_space=None, right_space=None):
    return Tag(placeholder="<x>", text="<x>", type=tag_type, position=0,
               left_space=left_space, right_space=right_space)


def _word(left_space=None, right_space=None, **kwargs):
    return Word(placeholder="w", left_space=left_space, right_space=right_space, **kwargs)


class TestMergeSpaces:
    """Both recorded spaces are kept when they differ."""

    @pytest.mark.parametrize("left,right,expected", [
        (None, None, None),
        (None, " ", " "),
        (" ", None, " "),
        (" ", " ", " "),
        (" ", "\n", " \n"),
        ("", " ", " "),
    ])
    def test_merge(self, left, right, expected):
        assert merge_spaces(left, right) == expected


class TestTagTag:
    def test_accumulates_all_spaces(self):
        left = _tag(TagType.CLOSING, right_space="\t")
        right = _tag(TagType.OPENING, left_space=" ")
        assert infer_space(" ", left, right) == " \t "

    def test_nothing_recorded(self):
        assert infer_space_between(_tag(TagType.OPENING), _tag(TagType.OPENING)) is None


class TestTagWord:
    def test_closing_tag_overrides_with_word_left_space(self):
        left = _tag(TagType.CLOSING, right_space="X")
        assert infer_space(None, left, _word(left_space="Y")) == "Y"

    def test_closing_tag_discards_carried_space(self):
        left = _tag(TagType.CLOSING, right_space="X")
        assert infer_space("P", left, _word()) is None

    def test_opening_tag_is_transparent(self):
        left = _tag(TagType.OPENING, right_space="X")
        assert infer_space(None, left, _word(left_space="Y")) == "X"

    def test_opening_tag_keeps_carried_space(self):
        left = _tag(TagType.OPENING, right_space="X")
        assert infer_space("P", left, _word()) == "PX"

    def test_self_contained_tag_is_transparent(self):
        left = _tag(TagType.SELF_CONTAINED, right_space=" ")
        assert infer_space(None, left, _word(left_space="Y")) == " "


class TestWordTag:
    def test_opening_tag_keeps_base(self):
        right = _tag(TagType.OPENING, left_space="Y")
        assert infer_space(None, _word(right_space="X"), right) == "X"

    def test_closing_tag_overrides_with_tag_left_space(self):
        right = _tag(TagType.CLOSING, left_space="Y")
        assert infer_space("P", _word(right_space="X"), right) == "Y"

    def test_closing_tag_without_left_space(self):
        right = _tag(TagType.CLOSING)
        assert infer_space(None, _word(right_space=" "), right) is None

    def test_self_contained_tag_overrides(self):
        right = _tag(TagType.SELF_CONTAINED, left_space="Y")
        assert infer_space(None, _word(right_space="X"), right) == "Y"


class TestWordWord:
    def test_same_space_on_both_sides(self):
        assert infer_space_between(_word(right_space=" "), _word(left_space=" ")) == " "

    def test_different_spaces_concatenate(self):
        assert infer_space_between(_word(right_space=" "), _word(left_space="\n")) == " \n"

    def test_carried_space(self):
        assert infer_space(" ", _word(), _word()) == " "

    def test_nothing_recorded(self):
        assert infer_space_between(_word(), _word()) is None

    def test_virtual_right_space(self):
        assert infer_space_between(_word(virtual_right_space=True), _word()) == " "

    def test_virtual_left_space(self):
        assert infer_space_between(_word(), _word(virtual_left_space=True)) == " "

    def test_recorded_space_beats_virtual_space(self):
        left = _word(right_space="\t", virtual_right_space=True)
        assert infer_space_between(left, _word()) == "\t"

    def test_empty_space_is_not_missing(self):
        left = _word(right_space="", virtual_right_space=True)
        assert infer_space_between(left, _word()) == ""


class TestUnknownTokens:
    def test_plain_token_raises_type_error(self):
        with pytest.raises(TypeError):
            infer_space(None, Token(placeholder="?"), _word())


class TestStringTagTypes:
    """Tags built with a plain string type follow the same rules."""

    def test_closing_string_type_overrides_with_word_left_space(self):
        left = _tag("closing", right_space="X")
        assert infer_space(None, left, _word(left_space="Y")) == "Y"

    def test_opening_string_type_keeps_base(self):
        right = _tag("opening", left_space="Y")
        assert infer_space(None, _word(right_space="X"), right) == "X"
