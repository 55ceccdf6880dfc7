"""
Trailing comment markers recognised inside fenced code.

Every marker can be written in six comment styles so it stays a valid
comment in the language being shown:

    foo()  // [!code ++]
    foo()  # [!code focus]
    foo()  /* [!code error] */
    foo()  -- [!code warning]
    <p/>   <!-- [!code --] -->
    (foo)  ; (1)

``[!code ...]`` markers must be trailing: only whitespace and other
``[!code ...]`` markers may follow them, so a line can carry several.
Annotation references ``(N)`` must be the very last token on the line.
"""

import re

_COMMENT_STYLES = (
    r"//\s*{marker}",
    r"\#\s*{marker}",
    r"/\*\s*{marker}\s*\*/",
    r"--\s*{marker}",
    r"<!--\s*{marker}\s*-->",
    r";\s*{marker}",
)


def _comment_alternatives(marker: str) -> str:
    return "|".join(style.format(marker=marker) for style in _COMMENT_STYLES)


_ANY_CODE_MARKER = "(?:%s)" % _comment_alternatives(
    r"\[!code\s*(?:\+\+|--|focus|error|warning)\]"
)

# Lookahead shared by all [!code ...] families: the rest of the line holds
# nothing but whitespace and further markers.
_TRAILING = r"(?=(?:[^\S\n]*%s)*[^\S\n]*$)" % _ANY_CODE_MARKER


def _code_marker_pattern(marker: str) -> re.Pattern:
    return re.compile(
        r"[^\S\n]*(?:%s)%s" % (_comment_alternatives(marker), _TRAILING)
    )


DIFF_MARKER_PATTERN = _code_marker_pattern(r"\[!code\s*(\+\+|--)\]")

FOCUS_MARKER_PATTERN = _code_marker_pattern(r"\[!code\s+focus\]")

ERROR_MARKER_PATTERN = _code_marker_pattern(r"\[!code\s+error\]")

WARNING_MARKER_PATTERN = _code_marker_pattern(r"\[!code\s+warning\]")

ANNOTATION_MARKER_PATTERN = re.compile(
    r"[^\S\n]*(?:%s)[^\S\n]*$" % _comment_alternatives(r"\((\d+)\)")
)


def first_group(match: re.Match) -> str | None:
    """Return the first participating capture group of a marker match."""
    return next((group for group in match.groups() if group is not None), None)
