"""
Icon rendering and detection.

Two icon sets are used: Phosphor for named UI icons (``:rocket:``) and
Devicons for programming language logos.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from django.utils.html import format_html

VALID_WEIGHTS = ("regular", "bold", "fill", "light", "thin", "duotone")

MANUAL_ICON_PATTERN = re.compile(r"^:([a-z0-9-]+):\s*(.+)$", re.IGNORECASE)

PHOSPHOR = "phosphor"
LANGUAGE = "language"

DEVICONS = {
    "bash": "devicon-bash-plain",
    "c": "devicon-c-plain",
    "clojure": "devicon-clojure-plain",
    "coffeescript": "devicon-coffeescript-original",
    "cpp": "devicon-cplusplus-plain",
    "cs": "devicon-csharp-plain",
    "csharp": "devicon-csharp-plain",
    "css": "devicon-css3-plain",
    "dart": "devicon-dart-plain",
    "docker": "devicon-docker-plain",
    "dockerfile": "devicon-docker-plain",
    "elixir": "devicon-elixir-plain",
    "erlang": "devicon-erlang-plain",
    "go": "devicon-go-plain",
    "golang": "devicon-go-plain",
    "graphql": "devicon-graphql-plain",
    "groovy": "devicon-groovy-plain",
    "haskell": "devicon-haskell-plain",
    "html": "devicon-html5-plain",
    "java": "devicon-java-plain",
    "javascript": "devicon-javascript-plain",
    "js": "devicon-javascript-plain",
    "json": "devicon-json-plain",
    "jsx": "devicon-react-original",
    "kotlin": "devicon-kotlin-plain",
    "lua": "devicon-lua-plain",
    "markdown": "devicon-markdown-original",
    "md": "devicon-markdown-original",
    "npm": "devicon-npm-original-wordmark",
    "php": "devicon-php-plain",
    "powershell": "devicon-powershell-plain",
    "py": "devicon-python-plain",
    "python": "devicon-python-plain",
    "r": "devicon-r-plain",
    "rb": "devicon-ruby-plain",
    "ruby": "devicon-ruby-plain",
    "rs": "devicon-rust-original",
    "rust": "devicon-rust-original",
    "sass": "devicon-sass-original",
    "scala": "devicon-scala-plain",
    "scss": "devicon-sass-original",
    "sh": "devicon-bash-plain",
    "shell": "devicon-bash-plain",
    "sql": "devicon-azuresqldatabase-plain",
    "svelte": "devicon-svelte-plain",
    "swift": "devicon-swift-plain",
    "toml": "devicon-toml-plain",
    "ts": "devicon-typescript-plain",
    "tsx": "devicon-react-original",
    "typescript": "devicon-typescript-plain",
    "vue": "devicon-vuejs-plain",
    "yaml": "devicon-yaml-plain",
    "yml": "devicon-yaml-plain",
    "zsh": "devicon-bash-plain",
}


@dataclass(frozen=True)
class IconMatch:
    label: Optional[str]
    icon: Optional[str] = None
    source: Optional[str] = None


def icon_classes(name: str, weight: str = "regular") -> str:
    """Phosphor classes for ``name``; unknown weights fall back to regular."""
    name = str(name).replace("_", "-")
    if weight not in VALID_WEIGHTS:
        weight = "regular"
    weight_class = "ph" if weight == "regular" else f"ph-{weight}"
    return f"{weight_class} ph-{name}"


def render_icon(name: str, weight: str = "regular") -> str:
    return format_html('<i class="{}" aria-hidden="true"></i>', icon_classes(name, weight))


def render_language_icon(language: Optional[str]) -> str:
    devicon = DEVICONS.get(str(language or "").lower())
    if not devicon:
        return ""
    return format_html('<i class="{} colored" aria-hidden="true"></i>', devicon)


def render_icon_match(match: IconMatch) -> str:
    if not match.icon:
        return ""
    if match.source == LANGUAGE:
        return render_language_icon(match.icon)
    return render_icon(match.icon)


def parse_manual_icon(label: Optional[str]) -> Optional[IconMatch]:
    """Split ``":icon-name: label"`` into its icon and label."""
    if not label:
        return None
    match = MANUAL_ICON_PATTERN.match(label)
    if not match:
        return None
    return IconMatch(label=match.group(2).strip(), icon=match.group(1), source=PHOSPHOR)


def detect_title_icon(title: Optional[str], language: Optional[str]) -> IconMatch:
    """Icon for a code block title: manual prefix, else the block language."""
    if title is None:
        return IconMatch(label=None)
    manual = parse_manual_icon(title)
    if manual:
        return manual
    return IconMatch(label=title, icon=language, source=LANGUAGE)
