"""Helpers shared by the preprocessors."""

from __future__ import annotations

import re
from typing import Callable, Iterable

from django.core.exceptions import ImproperlyConfigured

from ..support.fences import iter_fences
from ..support.regions import Region

_BACKTICK_RUN = re.compile(r"`+")

INLINE_CODE_PATTERN = re.compile(r"(`+).+?\1", re.DOTALL)


def raw_html_block(html: str) -> str:
    """
    Wrap rendered HTML in a Pandoc raw block so it passes through verbatim.

    The fence is made longer than any backtick run in ``html`` so code shown
    inside the component can never close it early.
    """
    longest = max((len(run) for run in _BACKTICK_RUN.findall(html)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"\n{fence}{{=html}}\n{html}\n{fence}\n\n"


def replace_regions(text: str, regions: Iterable[Region], replace: Callable[[Region], str]) -> str:
    """Rebuild ``text`` with each region's span replaced by ``replace(region)``."""
    parts = []
    last_end = 0
    for region in regions:
        parts.append(text[last_end:region.start])
        parts.append(replace(region))
        last_end = region.end
    parts.append(text[last_end:])
    return "".join(parts)


def nested_renderer(context) -> Callable[[str], str]:
    """Return a callable rendering markdown through the full pipeline."""
    renderer = context.renderer
    if renderer is None:
        raise ImproperlyConfigured("Container preprocessors need a renderer in the render context")
    return lambda markdown: renderer.render_fragment(markdown, context)


def map_outside_fences(text: str, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to every stretch of ``text`` between fenced blocks."""
    parts = []
    last_end = 0
    for fence in iter_fences(text):
        parts.append(transform(text[last_end:fence.start]))
        parts.append(text[fence.start:fence.end])
        last_end = fence.end
    parts.append(transform(text[last_end:]))
    return "".join(parts)


def map_prose(text: str, transform: Callable[[str], str]) -> str:
    """Like ``map_outside_fences`` but inline code spans are skipped too."""

    def outside_inline_code(segment):
        parts = []
        last_end = 0
        for match in INLINE_CODE_PATTERN.finditer(segment):
            parts.append(transform(segment[last_end:match.start()]))
            parts.append(match.group(0))
            last_end = match.end()
        parts.append(transform(segment[last_end:]))
        return "".join(parts)

    return map_outside_fences(text, outside_inline_code)
