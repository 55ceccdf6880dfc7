# engine/markdown/preprocessors/__init__.py

from .abbreviations import AbbreviationPreprocessor
from .accordion import AccordionPreprocessor
from .badges import BadgePreprocessor
from .callouts import CalloutPreprocessor
from .code_annotations import AnnotationPreprocessor
from .code_group import CodeGroupPreprocessor
from .code_import import CodeImportPreprocessor
from .code_markers import (
    DiffMarkerPreprocessor,
    ErrorMarkerPreprocessor,
    FocusMarkerPreprocessor,
    WarningMarkerPreprocessor,
)
from .code_options import CodeOptionsPreprocessor
from .extended_fence import ExtendedFencePreprocessor
from .steps import StepsPreprocessor
from .tabs import TabsPreprocessor
from .variables import VariablesPreprocessor

# Registration order breaks ties between equal priorities
PREPROCESSORS = (
    ExtendedFencePreprocessor,  # ```` fences hide their inner fences and markers first
    VariablesPreprocessor,  # {{ name }} substitution, before imports pull in code
    CodeImportPreprocessor,  # <<< @/file snippets become fences
    AbbreviationPreprocessor,  # Collect and drop *[TERM]: definitions
    CodeOptionsPreprocessor,  # Capture [title]:option {highlights} per fence
    DiffMarkerPreprocessor,
    FocusMarkerPreprocessor,
    ErrorMarkerPreprocessor,
    WarningMarkerPreprocessor,
    AnnotationPreprocessor,  # (N) markers plus the list after the fence
    CalloutPreprocessor,
    AccordionPreprocessor,
    StepsPreprocessor,
    CodeGroupPreprocessor,
    TabsPreprocessor,
    BadgePreprocessor,
)
