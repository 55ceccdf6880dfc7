"""
Fenced code block recognition.

A fence header looks like::

    ```lang [title]:option {1,3-5}

followed by the body and a closing line made of at least as many backticks
as the opener. Fences without a language, or without a closing line, are
left alone by every fence processor.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

FENCE_OPEN_PATTERN = re.compile(r"^(?P<fence>`{3,})(?P<info>[^`\n]*)$")

FENCE_HEADER_PATTERN = re.compile(
    r"^[ \t]*(?P<lang>[\w+#.-]+)"
    r"(?:[ \t]*\[(?P<title>[^\]\n]+)\])?"
    r"(?P<option>:[^\s{]+)?"
    r"(?:[ \t]*\{(?P<highlights>[^}\n]*)\})?"
    r"[ \t]*$"
)


@dataclass(frozen=True)
class Fence:
    """A fenced block located in a document; offsets index the document."""

    start: int
    end: int
    body_start: int
    body_end: int
    fence: str
    info: str
    body: str
    lang: Optional[str] = None
    title: Optional[str] = None
    option: Optional[str] = None
    highlights: Optional[str] = None

    @property
    def has_language(self) -> bool:
        return bool(self.lang)

    def header(self, info: Optional[str] = None) -> str:
        return f"{self.fence}{self.info if info is None else info}"

    def closing(self, text: str) -> str:
        """Return the closing fence line (with its newline, if any)."""
        return text[self.body_end:self.end]


@dataclass(frozen=True)
class FenceDescriptor:
    lang: Optional[str] = None
    title: Optional[str] = None
    option: Optional[str] = None
    highlight_lines: tuple[int, ...] = ()
    diff_lines: dict = field(default_factory=dict)
    focus_lines: frozenset = frozenset()
    error_lines: frozenset = frozenset()
    warning_lines: frozenset = frozenset()
    body: str = ""

    @property
    def start_line(self) -> int:
        return start_line(self.option)


def _line_end(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _find_closing_line(text: str, pos: int, fence: str) -> Optional[tuple[int, int]]:
    closing = re.compile(r"`{%d,}[ \t]*" % len(fence))
    while pos < len(text):
        line_end = _line_end(text, pos)
        if closing.fullmatch(text, pos, line_end):
            return pos, min(line_end + 1, len(text))
        pos = line_end + 1
    return None


def iter_fences(text: str) -> Iterator[Fence]:
    """Yield every terminated backtick fence in document order."""
    pos = 0
    while pos < len(text):
        line_end = _line_end(text, pos)
        opener = FENCE_OPEN_PATTERN.match(text[pos:line_end])
        if opener and line_end < len(text):
            closing = _find_closing_line(text, line_end + 1, opener.group("fence"))
            if closing:
                close_start, close_end = closing
                yield _build_fence(text, pos, line_end + 1, close_start, close_end, opener)
                pos = close_end
                continue
        pos = line_end + 1


def _build_fence(text, start, body_start, body_end, end, opener) -> Fence:
    info = opener.group("info")
    header = FENCE_HEADER_PATTERN.match(info)
    fields = {}
    if header:
        fields = {
            "lang": header.group("lang"),
            "title": header.group("title"),
            "option": header.group("option"),
            "highlights": header.group("highlights"),
        }
    return Fence(
        start=start,
        end=end,
        body_start=body_start,
        body_end=body_end,
        fence=opener.group("fence"),
        info=info,
        body=text[body_start:body_end],
        **fields,
    )


def rewrite_fences(
    text: str,
    replace: Callable[[Fence], Optional[str]],
    skip: Callable[[int], bool] = lambda position: False,
) -> str:
    """
    Rebuild ``text`` with each language fence passed through ``replace``.

    ``replace`` returns the new source for the whole fence, or ``None`` to
    keep it. Fences for which ``skip(fence.start)`` is true are never
    handed to ``replace``.
    """
    parts = []
    last_end = 0
    for fence in iter_fences(text):
        if not fence.has_language or skip(fence.start):
            continue
        replacement = replace(fence)
        if replacement is None:
            continue
        parts.append(text[last_end:fence.start])
        parts.append(replacement)
        last_end = fence.end
    parts.append(text[last_end:])
    return "".join(parts)


def parse_highlights(spec: Optional[str]) -> tuple[int, ...]:
    """
    Expand a highlight spec such as ``"1,3-5,8"`` into sorted line numbers.

    Inverted ranges (``"5-3"``) and tokens that are not numbers contribute
    nothing.
    """
    if not spec or not spec.strip():
        return ()

    lines = set()
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        first, sep, last = part.partition("-")
        try:
            if sep:
                low, high = int(first), int(last)
                if low > high:
                    logger.debug("Ignoring inverted highlight range %r", part)
                lines.update(range(low, high + 1))
            else:
                lines.add(int(first))
        except ValueError:
            logger.debug("Ignoring malformed highlight token %r", part)
    return tuple(sorted(lines))


def line_numbers_enabled(option: Optional[str], default: bool = False) -> bool:
    if option == ":no-line-numbers":
        return False
    if option and option.startswith(":line-numbers"):
        return True
    return default


def start_line(option: Optional[str]) -> int:
    if not option or "=" not in option:
        return 1
    try:
        return int(option.rsplit("=", 1)[1])
    except ValueError:
        return 1


def generate_line_numbers(line_count: int, start: int = 1) -> list[int]:
    return list(range(start, start + max(line_count, 1)))


# Stand-ins for text an extended fence shows literally
BACKTICK_PLACEHOLDER = "\u200b\u200b\u200b"
CODE_MARKER_PLACEHOLDER = "\u200b!\u200bcode"


def protect_literal(body: str) -> str:
    """Hide backticks and ``[!code`` markers from the fence processors."""
    return body.replace("`", BACKTICK_PLACEHOLDER).replace("[!code", CODE_MARKER_PLACEHOLDER)


def restore_literal(html: str) -> str:
    return html.replace(BACKTICK_PLACEHOLDER, "`").replace(CODE_MARKER_PLACEHOLDER, "[!code")
