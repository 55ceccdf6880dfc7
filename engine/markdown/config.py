from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from django.conf import settings


@dataclass(frozen=True)
class SiteConfig:
    """
    Read-only view of the site configuration consumed by the pipeline.

    Loading and validating the configuration file belongs to the site
    builder; the pipeline only reads a handful of values from it.
    """

    title: str = "Documentation"
    branding: Mapping[str, Any] = field(default_factory=dict)
    search_exclude: tuple[str, ...] = ()
    line_numbers: bool = False
    variables: Mapping[str, Any] = field(default_factory=dict)
    docs_root: Path = Path("docs")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SiteConfig":
        data = data or {}
        search = data.get("search") or {}
        code = data.get("code") or {}
        return cls(
            title=str(data.get("title") or cls.title),
            branding=dict(data.get("branding") or {}),
            search_exclude=tuple(search.get("exclude") or ()),
            line_numbers=bool(code.get("line_numbers", False)),
            variables=dict(data.get("variables") or {}),
            docs_root=Path(data.get("docs_root") or "docs"),
        )

    @classmethod
    def from_settings(cls) -> "SiteConfig":
        return cls.from_mapping(getattr(settings, "FOLIO", None))


def get_pandoc_config():
    """
    Configuration for pypandoc/Pandoc markdown rendering.

    Syntax highlighting is switched off in Pandoc: code blocks come out as
    plain ``<pre class="lang"><code>`` and are highlighted by the code block
    postprocessor so every line can be wrapped and annotated.
    """
    extensions = "+".join(
        [
            "markdown",
            "autolink_bare_uris",
            "strikeout",
            "superscript",
            "subscript",
            "task_lists",
            "pipe_tables",
            "grid_tables",
            "definition_lists",
            "footnotes",
            "fenced_code_blocks",
            "backtick_code_blocks",
            "raw_html",
            "raw_attribute",
            "header_attributes",
            "auto_identifiers",
        ]
    )

    return {
        "format": extensions,
        "to": "html5",
        "extra_args": [
            "--no-highlight",
            "--wrap=preserve",
            *getattr(settings, "FOLIO_PANDOC_EXTRA_ARGS", []),
        ],
    }
