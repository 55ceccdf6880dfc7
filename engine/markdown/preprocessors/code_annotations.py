"""
Preprocessor for numbered code annotations.

Converts:
    ```py
    connect(host)  # (1)
    ```

    1. Uses the host from **settings**.

into a fence without the ``(1)`` marker and without the list. The marker
positions go to ``context["code_block_annotation_markers"]`` and the rendered
list items to ``context["code_block_annotation_content"]``; the code block
postprocessor turns them into annotation buttons and popover content.

Markers on a fence that is not followed by an ordered list are left alone.
"""

import dataclasses
import logging

from django.utils.html import escape

from ..pipeline import Processor
from ..support.annotations import find_annotation_list
from ..support.fences import iter_fences
from ..support.markers import ANNOTATION, extract_marker_lines
from ..support.regions import RegionTracker

logger = logging.getLogger(__name__)


def render_annotation(markdown, context):
    renderer = context.renderer
    if renderer is None:
        return escape(markdown)
    return renderer.render_fragment(markdown, context).strip()


class AnnotationPreprocessor(Processor):
    priority = 8

    def preprocess(self, text, context):
        markers = context.setdefault("code_block_annotation_markers", [])
        contents = context.setdefault("code_block_annotation_content", [])
        descriptors = context.get("code_block_options")
        regions = RegionTracker.for_markdown(text)

        parts = []
        last_end = 0
        for fence in iter_fences(text):
            if fence.start < last_end or not fence.has_language or regions.covers(fence.start):
                continue

            index = len(markers)
            result = extract_marker_lines(fence.body, ANNOTATION)
            annotations = find_annotation_list(text, fence.end) if result.lines else None
            if annotations is None:
                markers.append({})
                contents.append({})
                continue

            markers.append(result.lines)
            contents.append(
                {number: render_annotation(item, context) for number, item in annotations.items.items()}
            )
            if descriptors is not None and index < len(descriptors):
                descriptors[index] = dataclasses.replace(descriptors[index], body=result.content)

            parts.append(text[last_end:fence.body_start])
            parts.append(result.content)
            parts.append(fence.closing(text))
            parts.append("\n")
            last_end = annotations.end
            logger.debug("Attached %d annotations to code block %d", len(annotations.items), index)

        parts.append(text[last_end:])
        return "".join(parts)
