"""
Callout boxes, written either as containers or as GitHub alert blockquotes.

    :::tip Faster builds           > [!TIP]
    Cache the virtualenv.          > Cache the virtualenv.
    :::
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from .icons import render_icon

TEMPLATE_NAME = "engine/components/callout.html"


@dataclass(frozen=True)
class CalloutStyle:
    title: str
    icon: str


CALLOUT_STYLES = {
    "note": CalloutStyle(title="Note", icon="info"),
    "tip": CalloutStyle(title="Tip", icon="lightbulb"),
    "important": CalloutStyle(title="Important", icon="warning-circle"),
    "warning": CalloutStyle(title="Warning", icon="warning"),
    "danger": CalloutStyle(title="Danger", icon="siren"),
}

GITHUB_ALERT_KINDS = {
    "NOTE": "note",
    "TIP": "tip",
    "IMPORTANT": "important",
    "WARNING": "warning",
    "CAUTION": "danger",
}


def render_callout(kind: str, content_html: str, title: Optional[str] = None) -> str:
    style = CALLOUT_STYLES[kind]
    return render_to_string(
        TEMPLATE_NAME,
        {
            "kind": kind,
            "title": title or style.title,
            "icon": render_icon(style.icon),
            "content": mark_safe(content_html),
        },
    ).strip()
