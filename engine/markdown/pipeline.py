"""
Processor pipeline for markdown rendering.

A render is two disjoint passes over one document:

    preprocess  -- raw markdown text, before Pandoc
    postprocess -- rendered HTML, after Pandoc

Processors are registered once at startup through ``PipelineBuilder`` and
the resulting ``Pipeline`` is immutable. Each processor runs in ascending
``priority`` order; processors with equal priority keep registration order.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable

from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 100


class RenderContext(dict):
    """
    Per-render side channel shared by the processors of one document.

    A plain mutable mapping, so processors read and write it the same way
    they would a dict. ``child()`` gives a nested render (tab panels,
    code-group panels) its own fresh context; only the read-only
    collaborators and the id sequence are carried over.
    """

    SHARED_KEYS = ("config", "renderer", "snippet_loader", "current_file")

    def __init__(self, *args, id_sequence=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._id_sequence = id_sequence if id_sequence is not None else itertools.count(1)

    def child(self) -> "RenderContext":
        shared = {key: self[key] for key in self.SHARED_KEYS if key in self}
        return RenderContext(shared, id_sequence=self._id_sequence)

    def next_id(self, prefix: str) -> str:
        """Return a document-unique element id such as ``tabs-3``."""
        return f"{prefix}-{next(self._id_sequence)}"

    @property
    def config(self):
        return self.get("config")

    @property
    def renderer(self):
        return self.get("renderer")


class Processor:
    """
    Base type for pipeline processors.

    Subclasses override ``preprocess``, ``postprocess`` or both. Processors
    must not keep per-render state on ``self``: the same instance serves
    every document, possibly from several threads.
    """

    priority = DEFAULT_PRIORITY

    @property
    def name(self) -> str:
        return type(self).__name__

    def preprocess(self, text: str, context: RenderContext) -> str:
        return text

    def postprocess(self, html: str, context: RenderContext) -> str:
        return html

    def __repr__(self):
        return f"<{self.name} priority={self.priority}>"


class Pipeline:
    """An ordered, read-only sequence of processors."""

    def __init__(self, processors: Iterable[Processor] = ()):
        ordered = sorted(
            processors,
            key=lambda processor: (
                processor.priority if processor.priority is not None else DEFAULT_PRIORITY
            ),
        )
        self._processors = tuple(ordered)

    @property
    def processors(self) -> tuple[Processor, ...]:
        return self._processors

    def __len__(self):
        return len(self._processors)

    def __iter__(self):
        return iter(self._processors)

    def run_preprocessors(self, content: str, context: RenderContext) -> str:
        """Apply every processor's ``preprocess`` in priority order."""
        for processor in self._processors:
            content = self._run(processor, processor.preprocess, content, context)
        return content

    def run_postprocessors(self, html: str, context: RenderContext) -> str:
        """Apply every processor's ``postprocess`` in priority order."""
        for processor in self._processors:
            html = self._run(processor, processor.postprocess, html, context)
        return html

    @staticmethod
    def _run(processor, step, value, context):
        try:
            return step(value, context)
        except Exception:
            logger.error("Processor %s failed during %s", processor.name, step.__name__)
            raise


class PipelineBuilder:
    """
    Collects processors at startup and freezes them into a ``Pipeline``.

    Example:
        >>> pipeline = PipelineBuilder().register(TabsPreprocessor()).build()
    """

    def __init__(self):
        self._processors: list[Processor] = []
        self._built = False

    def register(self, *processors: Processor) -> "PipelineBuilder":
        if self._built:
            raise ImproperlyConfigured("Cannot register processors after the pipeline was built")
        for processor in processors:
            if isinstance(processor, type):
                processor = processor()
            if not isinstance(processor, Processor):
                raise ImproperlyConfigured(f"{processor!r} is not a markdown Processor")
            self._processors.append(processor)
        return self

    def build(self) -> Pipeline:
        self._built = True
        pipeline = Pipeline(self._processors)
        logger.debug("Built markdown pipeline: %s", ", ".join(p.name for p in pipeline))
        return pipeline


def build_default_pipeline() -> Pipeline:
    """Register the standard preprocessors and postprocessors."""
    from .postprocessors import POSTPROCESSORS
    from .preprocessors import PREPROCESSORS

    return PipelineBuilder().register(*PREPROCESSORS, *POSTPROCESSORS).build()
