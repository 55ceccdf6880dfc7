"""
Line marker extraction for fenced code bodies.

Each family is one top-to-bottom pass: matching lines are recorded under
their 1-based line number and lose the marker substring, every other line
passes through untouched. Newlines are never added or removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .patterns import (
    ANNOTATION_MARKER_PATTERN,
    DIFF_MARKER_PATTERN,
    ERROR_MARKER_PATTERN,
    FOCUS_MARKER_PATTERN,
    WARNING_MARKER_PATTERN,
    first_group,
)

ADDITION = "addition"
DELETION = "deletion"


@dataclass(frozen=True)
class MarkerFamily:
    name: str
    pattern: object
    kind: Callable = lambda match: True


def _diff_kind(match):
    return ADDITION if first_group(match) == "++" else DELETION


def _annotation_number(match):
    return int(first_group(match))


DIFF = MarkerFamily("diff", DIFF_MARKER_PATTERN, _diff_kind)
FOCUS = MarkerFamily("focus", FOCUS_MARKER_PATTERN)
ERROR = MarkerFamily("error", ERROR_MARKER_PATTERN)
WARNING = MarkerFamily("warning", WARNING_MARKER_PATTERN)
ANNOTATION = MarkerFamily("annotation", ANNOTATION_MARKER_PATTERN, _annotation_number)

# Order in which families are stripped from a fence body
LINE_MARKER_FAMILIES = (DIFF, FOCUS, ERROR, WARNING)


@dataclass
class ExtractionResult:
    lines: dict[int, object] = field(default_factory=dict)
    content: str = ""


def extract_marker_lines(content: str, family: MarkerFamily) -> ExtractionResult:
    """
    Strip one marker family from ``content``.

    Returns the ``line number -> kind`` map and the cleaned content, which
    always has exactly as many lines as the input.
    """
    result = ExtractionResult()
    cleaned = []
    for number, line in enumerate(content.split("\n"), start=1):
        match = family.pattern.search(line)
        if match:
            result.lines[number] = family.kind(match)
            line = family.pattern.sub("", line)
        cleaned.append(line)
    result.content = "\n".join(cleaned)
    return result


def extract_line_markers(content: str, families=LINE_MARKER_FAMILIES):
    """
    Apply several families in sequence.

    Returns ``(markers, cleaned)`` where ``markers`` maps each family name to
    its line map. A line may appear in several maps.
    """
    markers = {}
    for family in families:
        result = extract_marker_lines(content, family)
        markers[family.name] = result.lines
        content = result.content
    return markers, content


def count_lines(content: str) -> int:
    return content.count("\n") + 1
