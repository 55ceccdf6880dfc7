"""
Preprocessor that substitutes ``{{ name }}`` variables from the site config.

Converts (with ``variables: {version: "2.1", pkg: {name: "folio"}}``):
    Install {{ pkg.name }} {{ version }}    → Install folio 2.1

Fenced code is left alone unless its language carries a ``-vars`` suffix:
    ```bash-vars                            → ```bash
    pip install folio=={{ version }}        → pip install folio==2.1
"""

import re

from ..pipeline import Processor
from ..support.fences import iter_fences

VARIABLE_PATTERN = re.compile(r"\{\{\s*([a-zA-Z0-9_.]+)\s*\}\}")
VARS_SUFFIX = "-vars"


def resolve_variable(key, variables):
    current = variables
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def substitute_variables(text, variables):
    def replace(match):
        value = resolve_variable(match.group(1), variables)
        return match.group(0) if value is None else str(value)

    return VARIABLE_PATTERN.sub(replace, text)


class VariablesPreprocessor(Processor):
    priority = 1

    def preprocess(self, text, context):
        config = context.config
        variables = dict(config.variables) if config is not None else {}
        if not variables or "{{" not in text:
            return text

        parts = []
        last_end = 0
        for fence in iter_fences(text):
            parts.append(substitute_variables(text[last_end:fence.start], variables))
            source = text[fence.start:fence.end]
            if fence.lang and fence.lang.endswith(VARS_SUFFIX):
                header = fence.header(fence.info.replace(fence.lang, fence.lang[: -len(VARS_SUFFIX)], 1))
                source = substitute_variables(header + text[fence.body_start - 1:fence.end], variables)
            parts.append(source)
            last_end = fence.end
        parts.append(substitute_variables(text[last_end:], variables))
        return "".join(parts)
