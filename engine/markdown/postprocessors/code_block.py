# engine/markdown/postprocessors/code_block.py
"""
Postprocessor that turns Pandoc's plain code blocks into code block
components.

Pandoc (run with ``--no-highlight``) renders a fence as:

    <pre class="js"><code>const a = 1;
    const b = 2;</code></pre>

Each block is highlighted with Pygments, split into one ``<span>`` per source
line carrying the classes recorded by the fence preprocessors (highlights,
diff, focus, error, warning, annotations), and wrapped with a title bar, an
optional line number gutter and a copy button.

The n-th block outside tabs and code groups is described by the n-th entry of
``context["code_block_options"]``; blocks inside those components were
already processed by their own nested render.
"""

import logging

from bs4 import BeautifulSoup
from django.template.loader import render_to_string
from django.utils.safestring import mark_safe

from ..pipeline import Processor
from ..support.fences import generate_line_numbers, line_numbers_enabled
from ..support.highlight import highlight_code
from ..support.icons import detect_title_icon, render_icon, render_icon_match
from ..support.line_wrapper import LineFeatures, wrap_lines
from ..support.markers import count_lines
from ..support.regions import enclosing_component
from .utils import get_shared_soup, soup_to_html

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "engine/components/code_block.html"


def _entry(context, key, index, default):
    values = context.get(key) or []
    if index is None or index >= len(values) or values[index] is None:
        return default
    return values[index]


class CodeBlockPostprocessor(Processor):
    priority = 20

    def postprocess(self, html, context):
        if "<pre" not in html:
            return html

        descriptors = context.get("code_block_options") or []
        soup = get_shared_soup(html, context)
        position = 0
        replaced = False

        for pre in soup.find_all("pre"):
            code = pre.find("code", recursive=False)
            if code is None or enclosing_component(pre) is not None:
                continue

            classes = pre.get("class") or []
            descriptor = None
            index = None
            if position < len(descriptors) and descriptors[position].lang in classes:
                descriptor = descriptors[position]
                index = position
                position += 1
            elif not classes:
                # Indented code and fences without a language stay plain
                continue

            rendered = self.render_block(code.get_text(), classes, descriptor, index, context)
            pre.replace_with(BeautifulSoup(rendered, "html.parser").find("div"))
            replaced = True

        if position < len(descriptors):
            logger.debug(
                "%d of %d captured code blocks had no matching <pre>",
                len(descriptors) - position,
                len(descriptors),
            )

        if not replaced:
            return html
        return soup_to_html(context, soup)

    def render_block(self, code, classes, descriptor, index, context):
        lang = descriptor.lang if descriptor else classes[0]
        config = context.config
        default_line_numbers = config.line_numbers if config is not None else False

        option = descriptor.option if descriptor else None
        start = descriptor.start_line if descriptor else 1
        features = LineFeatures(
            highlights=descriptor.highlight_lines if descriptor else (),
            diff_lines=_entry(context, "code_block_diff_lines", index, {}),
            focus_lines=_entry(context, "code_block_focus_lines", index, ()),
            error_lines=_entry(context, "code_block_error_lines", index, ()),
            warning_lines=_entry(context, "code_block_warning_lines", index, ()),
            annotation_markers=_entry(context, "code_block_annotation_markers", index, {}),
            start_line=start,
        )
        annotations = _entry(context, "code_block_annotation_content", index, {})

        show_line_numbers = line_numbers_enabled(option, default_line_numbers)
        title = detect_title_icon(descriptor.title if descriptor else None, lang)

        return render_to_string(
            TEMPLATE_NAME,
            {
                "lang": lang,
                "title": title.label,
                "title_icon": render_icon_match(title),
                "code_html": mark_safe(wrap_lines(highlight_code(code, lang), features)),
                "code_text": code,
                "copy_icon": render_icon("copy"),
                "show_line_numbers": show_line_numbers,
                "line_numbers": generate_line_numbers(count_lines(code), start) if show_line_numbers else [],
                "has_focus": features.has_focus,
                "annotations": [
                    (number, mark_safe(content)) for number, content in sorted(annotations.items())
                ],
            },
        ).strip()
