from .document import ToastDocument, load_document, save_document
from .outcome import DismissalReason, DisplayOutcome, OutcomeKind
from .sound import (
    NormalSound,
    NormalSoundName,
    Silent,
    SoundDefinition,
    VariableSound,
    VariableSoundCategory,
)
from .templates import DEFAULT_CATALOG, Template, TemplateCatalog, TemplateInfo

__all__ = [
    "DEFAULT_CATALOG",
    "DismissalReason",
    "DisplayOutcome",
    "NormalSound",
    "NormalSoundName",
    "OutcomeKind",
    "Silent",
    "SoundDefinition",
    "Template",
    "TemplateCatalog",
    "TemplateInfo",
    "ToastDocument",
    "VariableSound",
    "VariableSoundCategory",
    "load_document",
    "save_document",
]
