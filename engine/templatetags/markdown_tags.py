# engine/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from engine.markdown.renderer import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value or ""))


@register.simple_tag(takes_context=True)
def markdown_with_context(context, value):
    """Render markdown and expose the collected table of contents as ``toc``"""
    processor_context = {"current_file": context.get("current_file")}
    html = render_markdown(value or "", context=processor_context)
    context["toc"] = processor_context.get("toc", [])
    return mark_safe(html)
