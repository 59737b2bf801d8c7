"""Tests for color token parsing and renderers."""

import pytest

from errorkit.services.colors import resolve_color, is_valid_color
from errorkit.services.renderers import AnsiRenderer, CssRenderer, PlainRenderer, get_renderer


class TestResolveColor:
    """Hex, rgb()/rgba() and named tokens."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("#f00", (255, 0, 0)),
            ("#F00A", (255, 0, 0)),
            ("#00ff00", (0, 255, 0)),
            ("#0000FF80", (0, 0, 255)),
            ("rgb(10, 20, 30)", (10, 20, 30)),
            ("rgb(10 20 30)", (10, 20, 30)),
            ("rgba(10, 20, 30, 0.5)", (10, 20, 30)),
            ("rgba(10 20 30 / 50%)", (10, 20, 30)),
            ("rgb(100%, 50%, 0%)", (255, 128, 0)),
            ("rgb(300, 0, 0)", (255, 0, 0)),
        ],
    )
    def test_hex_and_rgb_tokens_become_truecolor(self, token, expected):
        directive = resolve_color(token)

        assert directive is not None
        assert directive.rgb == expected
        r, g, b = expected
        assert directive.ansi == f"\x1b[38;2;{r};{g};{b}m"

    def test_basic_named_color_uses_sixteen_color_escape(self):
        assert resolve_color("red").ansi == "\x1b[31m"
        assert resolve_color("GREY").ansi == "\x1b[90m"

    def test_other_named_color_uses_truecolor(self):
        directive = resolve_color("AliceBlue")

        assert directive.rgb == (240, 248, 255)
        assert directive.ansi == "\x1b[38;2;240;248;255m"

    @pytest.mark.parametrize(
        "token",
        ["", "#ff", "#fffff", "#ggg", "rgb(1,2)", "rgba(1,2,3,2)", "hsl(0, 100%, 50%)", "notacolor", " red", None, 42],
    )
    def test_invalid_tokens(self, token):
        assert resolve_color(token) is None
        assert not is_valid_color(token)


class TestRenderers:
    def test_ansi_colored_and_bold(self):
        text = AnsiRenderer().render("hi", resolve_color("red"), bold=True)

        assert text == "\x1b[31m\x1b[1mhi\x1b[0m"

    def test_ansi_invalid_color_keeps_bold(self):
        assert AnsiRenderer().render("hi", None, bold=True) == "\x1b[1mhi\x1b[0m"
        assert AnsiRenderer().render("hi", None) == "hi"

    def test_css_span(self):
        text = CssRenderer().render("<b>", resolve_color("#fff"), bold=False)

        assert text == '<span style="color: #fff; font-weight: normal;">&lt;b&gt;</span>'

    def test_plain_ignores_styling(self):
        assert PlainRenderer().render("hi", resolve_color("red"), bold=True) == "hi"

    def test_get_renderer_reads_environment(self, monkeypatch):
        monkeypatch.setenv("COLOR_RENDERER", "css")

        assert isinstance(get_renderer(), CssRenderer)
        assert isinstance(get_renderer("plain"), PlainRenderer)
        assert isinstance(get_renderer("unknown"), AnsiRenderer)
