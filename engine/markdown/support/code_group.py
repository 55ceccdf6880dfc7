"""
Parser for ``:::code-group`` containers: consecutive labelled fences shown
as one tabbed code block.

    :::code-group
    ```js [config.js]
    export default {}
    ```
    ```ts [config.ts]
    export default {} satisfies Config
    ```
    :::
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .fences import iter_fences
from .icons import detect_title_icon
from .markers import ANNOTATION, LINE_MARKER_FAMILIES, extract_line_markers, extract_marker_lines

logger = logging.getLogger(__name__)


# Annotation lists cannot follow a fence inside a group, so (N) is dropped too
COPY_MARKER_FAMILIES = LINE_MARKER_FAMILIES + (ANNOTATION,)


@dataclass(frozen=True)
class CodeGroupBlock:
    label: str
    lang: Optional[str]
    markdown: str
    code_text: str
    icon: Optional[str] = None
    icon_source: Optional[str] = None


@dataclass(frozen=True)
class CodeGroupPanel:
    label: str
    lang: Optional[str]
    html: str
    code_text: str
    is_first: bool = False
    icon: Optional[str] = None
    icon_source: Optional[str] = None


def _panel_markdown(fence) -> str:
    """The fence re-emitted without its label, for a nested render."""
    info = fence.lang or ""
    if fence.option:
        info += fence.option
    if fence.highlights:
        info += f" {{{fence.highlights}}}"
    body = extract_marker_lines(fence.body, ANNOTATION).content
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{fence.fence}{info}\n{body}{fence.fence}\n"


def extract_blocks(content: str) -> list[CodeGroupBlock]:
    blocks = []
    for fence in iter_fences(content):
        label = fence.title
        if not label:
            logger.warning(
                "Code group fence %r has no [label]; rendering it unlabeled",
                fence.info.strip() or "```",
            )
        # A manual ":icon: label" wins over the fence language
        icon = detect_title_icon((label or "").strip(), fence.lang)
        _, cleaned = extract_line_markers(fence.body, COPY_MARKER_FAMILIES)
        blocks.append(
            CodeGroupBlock(
                label=icon.label,
                lang=fence.lang,
                markdown=_panel_markdown(fence),
                code_text=cleaned.strip("\n"),
                icon=icon.icon,
                icon_source=icon.source,
            )
        )
    return blocks


def parse_code_group(content: str, render: Callable[[str], str]) -> list[CodeGroupPanel]:
    return [
        CodeGroupPanel(
            label=block.label,
            lang=block.lang,
            html=render(block.markdown),
            code_text=block.code_text,
            is_first=index == 0,
            icon=block.icon,
            icon_source=block.icon_source,
        )
        for index, block in enumerate(extract_blocks(content))
    ]
