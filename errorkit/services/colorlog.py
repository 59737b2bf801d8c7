import sys
from itertools import zip_longest
from typing import Optional, Sequence, TextIO, Union

from .colors import resolve_color
from .renderers import Renderer, get_renderer


Segments = Union[str, Sequence[str]]


def format_colored(
    message: Segments,
    color: Segments,
    bold: bool = False,
    renderer: Optional[Renderer] = None,
) -> str:
    """Build one styled line from a message and a color token.

    ``message`` and ``color`` may also be parallel sequences; every
    segment is styled on its own and the results are concatenated. A
    segment whose color is invalid or missing is left unstyled, bold
    is still applied.
    """
    renderer = renderer or get_renderer()

    if isinstance(message, str):
        token = color if isinstance(color, str) else None
        return renderer.render(message, resolve_color(token), bold)

    colors = [color] if isinstance(color, str) else list(color or [])
    parts = []
    for segment, token in zip_longest(message, colors[: len(message)]):
        parts.append(renderer.render(str(segment), resolve_color(token), bold))
    return "".join(parts)


def colorlog(
    message: Segments,
    color: Segments,
    bold: bool = False,
    *,
    renderer: Optional[Renderer] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write a colored line to stdout.

    Accepts hex (``#f00``, ``#ff0000aa``), ``rgb(255, 0, 0)``,
    ``rgba(255 0 0 / 50%)`` and CSS named colors; anything else prints
    the text unstyled.

    Example:
        colorlog("Error!", "red")
        colorlog(["OK ", "done"], ["#00FF00", "rgb(0, 0, 255)"], bold=True)
    """
    line = format_colored(message, color, bold, renderer)
    out = stream or sys.stdout
    out.write(line + "\n")
    out.flush()
