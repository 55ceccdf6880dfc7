# engine/markdown/postprocessors/__init__.py

from .abbreviations import AbbreviationPostprocessor
from .alerts import GitHubAlertPostprocessor
from .code_block import CodeBlockPostprocessor
from .custom_anchors import CustomAnchorPostprocessor
from .extended_fence import ExtendedFencePostprocessor
from .heading_anchors import HeadingAnchorPostprocessor
from .icons import IconPostprocessor
from .table_of_contents import TableOfContentsPostprocessor
from .table_wrapper import TableWrapperPostprocessor

# Registration order breaks ties between equal priorities
POSTPROCESSORS = (
    GitHubAlertPostprocessor,  # > [!NOTE] blockquotes, before their code is rendered
    CodeBlockPostprocessor,  # Highlight, wrap lines and add the copy button
    IconPostprocessor,  # :name: shortcodes, after code is protected in <pre>
    AbbreviationPostprocessor,
    ExtendedFencePostprocessor,  # Needs the finished code blocks
    CustomAnchorPostprocessor,  # {#id} suffixes, before anchors read the ids
    HeadingAnchorPostprocessor,
    TableOfContentsPostprocessor,  # Reads the anchored headings into context["toc"]
    TableWrapperPostprocessor,
)
