"""Exception hierarchy shared by the builder, selector and display manager.

Validation and state errors are raised before anything reaches the delivery
service. They also derive from the matching builtin (ValueError, IndexError,
RuntimeError) so callers can keep catching those.
"""
from __future__ import annotations

from typing import Iterable, Optional


class ToastNotifierError(Exception):
    """Base class for every error raised by toastnotifier."""


# Validation -----------------------------------------------------------------


class ValidationError(ToastNotifierError, ValueError):
    """Bad input shape or selection."""


class NoMatchingTemplate(ValidationError):
    def __init__(self, line_count: int, needs_image: bool) -> None:
        self.line_count = line_count
        self.needs_image = needs_image
        super().__init__(
            f"No templates available for {line_count} lines of text {_image_phrase(needs_image)}!"
        )


class AmbiguousTemplate(ValidationError):
    def __init__(self, line_count: int, needs_image: bool, candidates: Iterable[str]) -> None:
        self.line_count = line_count
        self.needs_image = needs_image
        self.candidates = list(candidates)
        super().__init__(
            f"{len(self.candidates)} templates available for {line_count} lines of text "
            f"{_image_phrase(needs_image)}! Use the 'template' option to pick one of: "
            + ", ".join(self.candidates)
        )


class UnknownTemplate(ValidationError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown template '{name}'")


class LineCountMismatch(ValidationError):
    def __init__(self, template: str, slots: int, lines: int) -> None:
        self.template = template
        self.slots = slots
        self.lines = lines
        super().__init__(f"Template {template} takes {slots} lines of text, got {lines}")


class ImageNotSupported(ValidationError):
    def __init__(self, template: str) -> None:
        self.template = template
        super().__init__(f"Selected template {template} does not support an image!")


class EmptyReference(ValidationError):
    """An image path or URL was blank."""


class InvalidSoundVariant(ValidationError):
    def __init__(self, variant: object) -> None:
        self.variant = variant
        super().__init__(f"Invalid sound variant '{variant}' specified! Only variants 1 to 10 are possible")


class VariantNotApplicable(ValidationError):
    def __init__(self, sound: str) -> None:
        self.sound = sound
        super().__init__(f"You can not specify a variant for the sound '{sound}'")


class UnknownSound(ValidationError):
    def __init__(self, sound: str) -> None:
        self.sound = sound
        super().__init__(f"The specified sound '{sound}' is invalid")


class InvalidDocument(ValidationError):
    """Stored XML that is not a toast document."""


class EmptyApplicationId(ValidationError):
    def __init__(self) -> None:
        super().__init__("Application ID can not be empty!")


# State ----------------------------------------------------------------------


class StateError(ToastNotifierError):
    """Operation not allowed in the object's current state."""


class AlreadyBuilt(StateError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("This builder has already been built. Changes are not allowed anymore.")


class IndexOutOfRange(StateError, IndexError):
    def __init__(self, index: int, slots: int) -> None:
        self.index = index
        self.slots = slots
        super().__init__(f"Text line {index} is out of range; template has {slots} line(s)")


class SessionAlreadyStarted(StateError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("A display manager can only show its notification once")


# Delivery -------------------------------------------------------------------


class DeliveryError(ToastNotifierError, RuntimeError):
    """Submitting failed, or the platform reported a failed notification."""

    def __init__(self, message: str, error: Optional[object] = None) -> None:
        super().__init__(message)
        self.error = error


def _image_phrase(needs_image: bool) -> str:
    return "and an image" if needs_image else "and no image"
