"""Sound selections and their ``ms-winsoundevent`` identifiers.

A selection is one of three shapes: ``Silent``, a fixed ``NormalSound`` or a
numbered ``VariableSound``. ``SoundDefinition`` pairs a selection with the
loop flag, which only decides the ``loop`` attribute on the audio node.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..errors import InvalidSoundVariant

SOUND_EVENT_PREFIX = "ms-winsoundevent:Notification."
MIN_VARIANT = 1
MAX_VARIANT = 10


class NormalSoundName(Enum):
    DEFAULT = "Default"
    IM = "IM"
    MAIL = "Mail"
    REMINDER = "Reminder"
    SMS = "SMS"


class VariableSoundCategory(Enum):
    ALARM = "Alarm"
    CALL = "Call"


@dataclass(frozen=True)
class Silent:
    pass


@dataclass(frozen=True)
class NormalSound:
    name: NormalSoundName = NormalSoundName.DEFAULT


@dataclass(frozen=True)
class VariableSound:
    category: VariableSoundCategory
    variant: int = MIN_VARIANT

    def __post_init__(self) -> None:
        if isinstance(self.variant, bool) or not isinstance(self.variant, int):
            raise InvalidSoundVariant(self.variant)
        if not MIN_VARIANT <= self.variant <= MAX_VARIANT:
            raise InvalidSoundVariant(self.variant)


PlayableSound = Union[NormalSound, VariableSound]
SoundSelection = Union[Silent, NormalSound, VariableSound]


@dataclass(frozen=True)
class SoundDefinition:
    selection: SoundSelection = field(default_factory=NormalSound)
    looping: bool = False

    @property
    def is_silent(self) -> bool:
        return isinstance(self.selection, Silent)


def sound_uri(selection: PlayableSound) -> str:
    """Return the audio ``src`` value for a playable selection.

    Variable categories always use the ``Looping.`` family name, whatever the
    loop flag says; the variant number is appended only above 1.
    """
    if isinstance(selection, NormalSound):
        return f"{SOUND_EVENT_PREFIX}{selection.name.value}"
    if isinstance(selection, VariableSound):
        uri = f"{SOUND_EVENT_PREFIX}Looping.{selection.category.value}"
        if selection.variant > 1:
            uri += str(selection.variant)
        return uri
    raise TypeError(f"No sound identifier for {selection!r}")
