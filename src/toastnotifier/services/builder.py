"""Fill a toast template and turn it into a finished document.

The builder is single use: the first ``build()`` renders the document and
freezes the builder, later calls hand back the same document and every
setter raises ``AlreadyBuilt``. Setters validate before they change anything,
so a failed call leaves the builder as it was.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from typing import List, Optional, Union

from ..errors import (
    AlreadyBuilt,
    EmptyReference,
    ImageNotSupported,
    IndexOutOfRange,
    VariantNotApplicable,
)
from ..models.document import ToastDocument
from ..models.sound import (
    NormalSound,
    NormalSoundName,
    PlayableSound,
    Silent,
    SoundDefinition,
    SoundSelection,
    VariableSound,
    VariableSoundCategory,
    sound_uri,
)
from ..models.templates import DEFAULT_CATALOG, Template, TemplateInfo

log = logging.getLogger(__name__)

URL_SCHEME_SEPARATOR = "://"
FILE_URL_PREFIX = "file:///"


class Duration(Enum):
    NORMAL = "normal"
    LONG = "long"


def resolve_image_source(reference: str) -> str:
    """URLs pass through untouched; local paths become ``file:///`` URLs."""
    if URL_SCHEME_SEPARATOR in reference:
        return reference
    return FILE_URL_PREFIX + reference.replace("\\", "/")


class NotificationBuilder:
    def __init__(self, template: Union[Template, TemplateInfo]) -> None:
        if isinstance(template, Template):
            template = DEFAULT_CATALOG.info(template)
        self._info: TemplateInfo = template
        self._lines: List[Optional[str]] = [None] * template.text_slot_count
        self._image: Optional[str] = None
        self._duration = Duration.NORMAL
        self._playable: PlayableSound = NormalSound(NormalSoundName.DEFAULT)
        self._silent = False
        self._looping = False
        self._document: Optional[ToastDocument] = None

    # Introspection

    @property
    def template(self) -> Template:
        return self._info.template

    @property
    def template_info(self) -> TemplateInfo:
        return self._info

    @property
    def text_slot_count(self) -> int:
        return self._info.text_slot_count

    @property
    def has_image_slot(self) -> bool:
        return self._info.has_image_slot

    @property
    def is_built(self) -> bool:
        return self._document is not None

    @property
    def image(self) -> Optional[str]:
        return self._image

    @property
    def duration(self) -> Duration:
        return self._duration

    @property
    def sound(self) -> SoundDefinition:
        selection: SoundSelection = Silent() if self._silent else self._playable
        return SoundDefinition(selection, self._looping)

    def __getitem__(self, line: int) -> Optional[str]:
        return self._lines[self._slot(line)]

    def __setitem__(self, line: int, text: str) -> None:
        self.set_text_line(line, text)

    # Setters

    def _check_changes_allowed(self) -> None:
        if self._document is not None:
            raise AlreadyBuilt()

    def _slot(self, line: int) -> int:
        if not 1 <= line <= len(self._lines):
            raise IndexOutOfRange(line, len(self._lines))
        return line - 1

    def set_text_line(self, line: int, text: str) -> "NotificationBuilder":
        self._check_changes_allowed()
        self._lines[self._slot(line)] = text
        return self

    def _check_image(self, reference: Optional[str], what: str) -> None:
        self._check_changes_allowed()
        if not self._info.has_image_slot:
            raise ImageNotSupported(self._info.name)
        if reference is None or not reference.strip():
            raise EmptyReference(f"Image {what} can not be empty")

    def set_image_from_file(self, path: str) -> "NotificationBuilder":
        self._check_image(path, "file path")
        self._image = path
        return self

    def set_image_from_url(self, url: str) -> "NotificationBuilder":
        self._check_image(url, "url")
        self._image = url
        return self

    def clear_image(self) -> "NotificationBuilder":
        self._check_changes_allowed()
        self._image = None
        return self

    def set_duration(self, duration: Duration) -> "NotificationBuilder":
        self._check_changes_allowed()
        self._duration = Duration(duration)
        return self

    def set_sound(
        self,
        sound: Union[SoundSelection, NormalSoundName, VariableSoundCategory],
        variant: Optional[int] = None,
    ) -> "NotificationBuilder":
        """Select the sound to play.

        Accepts a ready selection (``NormalSound``, ``VariableSound`` or
        ``Silent``), a ``NormalSoundName``, or a ``VariableSoundCategory``
        with an optional ``variant`` in 1..10. Picking a playable sound turns
        sound back on after ``disable_sound()``.
        """
        self._check_changes_allowed()
        if isinstance(sound, VariableSoundCategory):
            selection: SoundSelection = VariableSound(sound, 1 if variant is None else variant)
        elif variant is not None:
            raise VariantNotApplicable(getattr(sound, "value", str(sound)))
        elif isinstance(sound, NormalSoundName):
            selection = NormalSound(sound)
        elif isinstance(sound, (Silent, NormalSound, VariableSound)):
            selection = sound
        else:
            raise TypeError(f"Unsupported sound selection: {sound!r}")

        if isinstance(selection, Silent):
            self._silent = True
        else:
            self._playable = selection
            self._silent = False
        return self

    def disable_sound(self) -> "NotificationBuilder":
        return self.set_sound(Silent())

    def set_sound_looping(self, loop: bool) -> "NotificationBuilder":
        self._check_changes_allowed()
        self._looping = bool(loop)
        self._silent = False
        return self

    # Rendering

    def build(self) -> ToastDocument:
        if self._document is None:
            root = self._info.skeleton()
            self._update_texts(root)
            self._update_image(root)
            self._update_duration(root)
            self._update_sound(root)
            self._document = ToastDocument.from_element(root)
            log.debug("Built %s notification: %s", self._info.name, self._document.xml)
        return self._document

    def _update_texts(self, root: ET.Element) -> None:
        for node, text in zip(root.iter("text"), self._lines):
            node.text = text or ""

    def _update_image(self, root: ET.Element) -> None:
        if not self._image:
            return
        image = root.find(".//image")
        if image is not None:
            image.set("src", resolve_image_source(self._image))

    def _update_duration(self, root: ET.Element) -> None:
        if self._duration is Duration.LONG:
            root.set("duration", "long")

    def _update_sound(self, root: ET.Element) -> None:
        if self._silent:
            ET.SubElement(root, "audio", {"silent": "true"})
            return
        audio = ET.SubElement(root, "audio", {"src": sound_uri(self._playable)})
        if self._looping:
            audio.set("loop", "true")

    def __str__(self) -> str:
        if self._document is not None:
            return self._document.xml
        return ET.tostring(self._info.skeleton(), encoding="unicode")
