"""Static catalog of the legacy toast templates.

The table below is maintained by hand; every entry records how many text
slots the template has and whether it carries an image. ``skeleton()``
renders the empty document a builder starts from.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from ..errors import UnknownTemplate


class Template(Enum):
    TOAST_IMAGE_AND_TEXT_01 = "ToastImageAndText01"
    TOAST_IMAGE_AND_TEXT_02 = "ToastImageAndText02"
    TOAST_IMAGE_AND_TEXT_03 = "ToastImageAndText03"
    TOAST_IMAGE_AND_TEXT_04 = "ToastImageAndText04"
    TOAST_TEXT_01 = "ToastText01"
    TOAST_TEXT_02 = "ToastText02"
    TOAST_TEXT_03 = "ToastText03"
    TOAST_TEXT_04 = "ToastText04"


@dataclass(frozen=True)
class TemplateInfo:
    template: Template
    text_slot_count: int
    has_image_slot: bool

    @property
    def name(self) -> str:
        return self.template.value

    def skeleton(self) -> ET.Element:
        """Build a fresh, empty document tree for this template."""
        root = ET.Element("toast")
        visual = ET.SubElement(root, "visual")
        binding = ET.SubElement(visual, "binding", {"template": self.name})
        if self.has_image_slot:
            ET.SubElement(binding, "image", {"id": "1", "src": ""})
        for slot in range(1, self.text_slot_count + 1):
            ET.SubElement(binding, "text", {"id": str(slot)})
        return root


_TEMPLATE_TABLE = (
    TemplateInfo(Template.TOAST_IMAGE_AND_TEXT_01, 1, True),
    TemplateInfo(Template.TOAST_IMAGE_AND_TEXT_02, 2, True),
    TemplateInfo(Template.TOAST_IMAGE_AND_TEXT_03, 2, True),
    TemplateInfo(Template.TOAST_IMAGE_AND_TEXT_04, 3, True),
    TemplateInfo(Template.TOAST_TEXT_01, 1, False),
    TemplateInfo(Template.TOAST_TEXT_02, 2, False),
    TemplateInfo(Template.TOAST_TEXT_03, 2, False),
    TemplateInfo(Template.TOAST_TEXT_04, 3, False),
)


class TemplateCatalog:
    """Read-only lookup over a fixed set of templates."""

    def __init__(self, entries: Iterable[TemplateInfo]) -> None:
        self._entries: Dict[Template, TemplateInfo] = {}
        for info in entries:
            self._entries[info.template] = info

    def __iter__(self) -> Iterator[TemplateInfo]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, template: object) -> bool:
        return template in self._entries

    def info(self, template: Template) -> TemplateInfo:
        try:
            return self._entries[template]
        except KeyError:
            raise UnknownTemplate(template.value) from None

    def find(self, name: str) -> Optional[TemplateInfo]:
        wanted = name.strip().casefold()
        for info in self._entries.values():
            if info.name.casefold() == wanted:
                return info
        return None

    def lookup(self, name: str) -> TemplateInfo:
        info = self.find(name)
        if info is None:
            raise UnknownTemplate(name)
        return info

    def matching(self, line_count: int, needs_image: bool) -> List[TemplateInfo]:
        return [
            info
            for info in self._entries.values()
            if info.has_image_slot == needs_image and info.text_slot_count == line_count
        ]


DEFAULT_CATALOG = TemplateCatalog(_TEMPLATE_TABLE)
