"""
Preprocessor for inline badges.

    Released :badge[Beta]{type="warning"}
    → Released <span class="folio-badge folio-badge--warning">Beta</span>

``type`` is one of default, success, warning or danger; anything else falls
back to default. Badges in fenced or inline code stay literal. The badge is
emitted as raw inline HTML so Pandoc does not read ``[Beta]{...}`` as a
bracketed span.
"""

import re

from django.utils.html import format_html

from ..pipeline import Processor
from .utils import map_prose

BADGE_PATTERN = re.compile(r":badge\[(?P<text>[^\]\n]*)\](?:\{(?P<attributes>[^}\n]*)\})?")
TYPE_ATTRIBUTE_PATTERN = re.compile("type=[\"'“”]([^\"'“”]*)[\"'“”]")

BADGE_TYPES = ("default", "success", "warning", "danger")


def badge_type(attributes):
    match = TYPE_ATTRIBUTE_PATTERN.search(attributes or "")
    kind = match.group(1) if match else "default"
    return kind if kind in BADGE_TYPES else "default"


def render_badge(match):
    return format_html(
        '<span class="folio-badge folio-badge--{}">{}</span>',
        badge_type(match.group("attributes")),
        match.group("text"),
    )


class BadgePreprocessor(Processor):
    priority = 15

    def preprocess(self, text, context):
        if ":badge[" not in text:
            return text
        return map_prose(text, lambda segment: BADGE_PATTERN.sub(render_badge, segment))
