"""Parse ``--sound`` style specifications such as ``Call;5`` or ``Off``."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..errors import InvalidSoundVariant, UnknownSound, VariantNotApplicable
from ..models.sound import (
    MAX_VARIANT,
    MIN_VARIANT,
    NormalSound,
    NormalSoundName,
    Silent,
    SoundSelection,
    VariableSound,
    VariableSoundCategory,
)

log = logging.getLogger(__name__)

DISABLED_PSEUDONYMS = ("-", "disabled", "none", "off")


def _split(value: str) -> Tuple[str, Optional[str]]:
    name, sep, variant = value.partition(";")
    variant = variant.strip()
    if not sep or not variant:
        return name.strip(), None
    return name.strip(), variant


def _parse_variant(text: str) -> int:
    # isdigit() alone would also accept non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        raise InvalidSoundVariant(text)
    value = int(text)
    if not MIN_VARIANT <= value <= MAX_VARIANT:
        raise InvalidSoundVariant(text)
    return value


def _match(enum_cls, name: str):
    wanted = name.casefold()
    for member in enum_cls:
        if member.value.casefold() == wanted:
            return member
    return None


def resolve_sound(value: Optional[str]) -> Optional[SoundSelection]:
    """Resolve a sound setting.

    Returns ``None`` for an empty or missing value, meaning the caller
    keeps its default sound. Disable pseudonyms do not accept a variant.
    """
    if value is None or not value.strip():
        return None

    name, variant_text = _split(value)

    if name.casefold() in DISABLED_PSEUDONYMS:
        if variant_text is not None:
            raise VariantNotApplicable(name)
        return Silent()

    variant = _parse_variant(variant_text) if variant_text is not None else None

    category = _match(VariableSoundCategory, name)
    if category is not None:
        selection: SoundSelection = VariableSound(category, variant or MIN_VARIANT)
    elif variant is not None:
        raise VariantNotApplicable(name)
    else:
        normal = _match(NormalSoundName, name)
        if normal is None:
            raise UnknownSound(name)
        selection = NormalSound(normal)

    log.debug("Resolved sound %r to %s", value, selection)
    return selection
