import pytest

from linediff.color import RESET, Palette, is_style_name, sgr_sequence
from linediff.record import Kind


def test_single_style():
    assert sgr_sequence("red") == "\x1b[31m"
    assert sgr_sequence("normal") == "\x1b[0m"


def test_joins_several_styles():
    assert sgr_sequence(["bold", "green"]) == "\x1b[1;32m"
    assert sgr_sequence("bold green") == "\x1b[1;32m"


def test_second_color_is_the_background():
    assert sgr_sequence(["white", "blue"]) == "\x1b[37;44m"
    assert sgr_sequence("ul yellow black") == "\x1b[4;33;40m"


def test_rejects_unknown_style_names():
    with pytest.raises(ValueError, match="mauve"):
        sgr_sequence("bold mauve")


def test_style_names():
    assert is_style_name("cyan")
    assert is_style_name("strike")
    assert not is_style_name("mauve")


class TestPalette:
    def test_defaults(self):
        palette = Palette()

        assert palette.paint(Kind.COMMON, "x") == "\x1b[0mx" + RESET
        assert palette.paint(Kind.LEFT_ONLY, "x") == "\x1b[31mx" + RESET
        assert palette.paint(Kind.RIGHT_ONLY, "x") == "\x1b[32mx" + RESET

    def test_overrides_only_the_given_kinds(self):
        palette = Palette({"new": "bold blue", "old": []})

        assert palette.paint(Kind.RIGHT_ONLY, "x") == "\x1b[1;34mx\x1b[0m"
        assert palette.paint(Kind.LEFT_ONLY, "x") == "\x1b[31mx\x1b[0m"

    def test_bad_style_fails_on_construction(self):
        with pytest.raises(ValueError):
            Palette({"context": "mauve"})
