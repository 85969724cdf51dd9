"""Finished toast documents and their on-disk form.

A ``ToastDocument`` only keeps the serialized XML, so it can be shared freely
once built. Accessors parse a private copy on demand.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..errors import InvalidDocument

log = logging.getLogger(__name__)

ROOT_TAG = "toast"


@dataclass(frozen=True)
class ToastDocument:
    xml: str

    @classmethod
    def from_element(cls, root: ET.Element) -> "ToastDocument":
        return cls(ET.tostring(root, encoding="unicode"))

    @classmethod
    def from_xml(cls, text: str) -> "ToastDocument":
        """Validate and wrap XML produced elsewhere (e.g. a stored template file)."""
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise InvalidDocument(f"Notification document is not well-formed XML: {e}") from e
        if root.tag != ROOT_TAG:
            raise InvalidDocument(f"Expected a <{ROOT_TAG}> root element, found <{root.tag}>")
        return cls(text)

    def to_xml(self) -> str:
        return self.xml

    def __str__(self) -> str:
        return self.xml

    def element(self) -> ET.Element:
        """Return a freshly parsed tree; changes to it never touch this document."""
        return ET.fromstring(self.xml)

    @property
    def texts(self) -> List[str]:
        return [node.text or "" for node in self.element().iter("text")]

    @property
    def image_source(self) -> Optional[str]:
        image = self.element().find(".//image")
        if image is None:
            return None
        return image.get("src") or None

    @property
    def duration(self) -> Optional[str]:
        return self.element().get("duration")

    @property
    def audio(self) -> Optional[Dict[str, str]]:
        audio = self.element().find("audio")
        if audio is None:
            return None
        return dict(audio.attrib)

    @property
    def is_long(self) -> bool:
        return self.duration == "long"


def load_document(path: Path | str) -> ToastDocument:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Notification template file not found at {p}")
    document = ToastDocument.from_xml(p.read_text(encoding="utf-8"))
    log.debug("Loaded notification document from %s", p)
    return document


def save_document(document: ToastDocument, path: Path | str) -> Path:
    p = Path(path)
    p.write_text(document.to_xml(), encoding="utf-8")
    log.info("Saved notification document to %s", p)
    return p
