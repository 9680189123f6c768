from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import Any

from .json_fmt import format_json
from .markdown_fmt import format_markdown
from ..models import PullRequest

Formatter = Callable[[list[PullRequest]], str]

# Each format with the keyword options it understands.
_FORMATTERS: dict[str, tuple[Callable[..., str], frozenset[str]]] = {
    "json": (format_json, frozenset()),
    "markdown": (format_markdown, frozenset({"title"})),
}

FORMATS = tuple(_FORMATTERS)


def get_formatter(fmt: str, **options: Any) -> Formatter:
    """Return the renderer for ``fmt``, bound to the options that format accepts."""
    try:
        render, accepted = _FORMATTERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown format: {fmt!r}; expected one of {', '.join(FORMATS)}") from None
    bound = {name: value for name, value in options.items() if name in accepted}
    return partial(render, **bound) if bound else render
