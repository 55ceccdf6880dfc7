# engine/markdown/renderer.py

import logging
from functools import lru_cache

import pypandoc

from .config import SiteConfig, get_pandoc_config
from .pipeline import RenderContext, build_default_pipeline
from .postprocessors.utils import clear_shared_soup
from .support.snippets import FileSystemSnippetLoader

logger = logging.getLogger(__name__)

# Values handed back to the caller after a render
OUTPUT_KEYS = ("toc",)


def convert_markdown(text):
    """Convert markdown to HTML with Pandoc."""
    pandoc_config = get_pandoc_config()
    return pypandoc.convert_text(
        text,
        to=pandoc_config["to"],
        format=pandoc_config["format"],
        extra_args=pandoc_config["extra_args"],
        filters=pandoc_config.get("filters", []),
    )


class MarkdownRenderer:
    """
    Renders one markdown document per call: preprocess, convert, postprocess.

    The renderer owns an immutable pipeline and holds no per-document state,
    so one instance can serve concurrent renders.

    Args:
        pipeline: Processors to run; the default pipeline when omitted
        config: ``SiteConfig``; read from Django settings when omitted
        converter: Markdown to HTML callable; Pandoc when omitted
        snippet_loader: Source for ``<<< @/path`` imports; the docs root
            on disk when omitted
    """

    def __init__(self, pipeline=None, config=None, converter=None, snippet_loader=None):
        self.pipeline = pipeline if pipeline is not None else build_default_pipeline()
        self.config = config if config is not None else SiteConfig.from_settings()
        self.converter = converter or convert_markdown
        self.snippet_loader = snippet_loader or FileSystemSnippetLoader(self.config.docs_root)

    def new_context(self, context=None):
        """Fresh render context, seeded with the caller's collaborators."""
        seed = {key: context[key] for key in RenderContext.SHARED_KEYS if key in context} if context else {}
        render_context = RenderContext(seed)
        render_context.setdefault("config", self.config)
        render_context.setdefault("snippet_loader", self.snippet_loader)
        render_context["renderer"] = self
        return render_context

    def render(self, text, context=None):
        """
        Render markdown ``text`` to HTML.

        Every call runs on a new ``RenderContext``; per-document state never
        carries over between renders.

        Args:
            text: Raw markdown text
            context: Optional mapping of caller values (``config``,
                ``snippet_loader``, ``current_file``); after the call it also
                holds the outputs collected by the processors, such as ``toc``
        """
        render_context = self.new_context(context)
        html = self._render(text, render_context)
        if context is not None:
            for key in OUTPUT_KEYS:
                if key in render_context:
                    context[key] = render_context[key]
        return html

    def render_fragment(self, text, parent_context):
        """Render a nested piece of markdown (a tab panel, an annotation)."""
        return self._render(text, parent_context.child())

    def _render(self, text, context):
        text = text.replace("\r\n", "\n")

        # Pre-processing: Before markdown conversion
        text = self.pipeline.run_preprocessors(text, context)

        html = self.converter(text)

        # Post-processing: After markdown conversion
        html = self.pipeline.run_postprocessors(html, context)
        clear_shared_soup(context)

        logger.debug("Rendered %d characters of markdown", len(text))
        return html


@lru_cache(maxsize=1)
def get_default_renderer():
    return MarkdownRenderer()


def render_markdown(text, context=None):
    """
    Main rendering function with pre/post processing pipeline using pypandoc

    Args:
        text: Raw markdown text
        context: Optional dict for processors that need additional data
    """
    return get_default_renderer().render(text, context)
