import html
from typing import Optional, Protocol

from ..core.config import Config
from .colors import BOLD, RESET, ColorDirective


class Renderer(Protocol):
    def render(self, text: str, directive: Optional[ColorDirective], bold: bool = False) -> str:
        ...


class AnsiRenderer:
    """Terminal output using ANSI escape sequences."""

    def render(self, text: str, directive: Optional[ColorDirective], bold: bool = False) -> str:
        bold_ansi = BOLD if bold else ""
        if directive:
            return f"{directive.ansi}{bold_ansi}{text}{RESET}"
        if bold:
            return f"{BOLD}{text}{RESET}"
        return text


class CssRenderer:
    """Browser/HTML output: each piece of text becomes a styled span."""

    def render(self, text: str, directive: Optional[ColorDirective], bold: bool = False) -> str:
        weight = "bold" if bold else "normal"
        escaped = html.escape(text)
        if directive:
            return f'<span style="{directive.css} font-weight: {weight};">{escaped}</span>'
        if bold:
            return f'<span style="font-weight: bold;">{escaped}</span>'
        return escaped


class PlainRenderer:
    def render(self, text: str, directive: Optional[ColorDirective], bold: bool = False) -> str:
        return text


_RENDERERS = {
    "ansi": AnsiRenderer,
    "css": CssRenderer,
    "plain": PlainRenderer,
}


def get_renderer(name: Optional[str] = None) -> Renderer:
    """Return the renderer named ``name`` or the one configured in the environment.

    Unknown names fall back to ANSI output.
    """
    key = (name or Config.renderer_name()).strip().lower()
    return _RENDERERS.get(key, AnsiRenderer)()
