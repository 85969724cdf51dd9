"""Turn caller options into a configured NotificationBuilder."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import EmptyApplicationId, LineCountMismatch
from ..models.sound import Silent
from ..models.templates import DEFAULT_CATALOG, TemplateCatalog
from .builder import URL_SCHEME_SEPARATOR, Duration, NotificationBuilder
from .sound_resolver import resolve_sound
from .template_selector import select_template

log = logging.getLogger(__name__)


@dataclass
class NotificationOptions:
    application_id: str
    text_lines: List[str] = field(default_factory=list)
    image: Optional[str] = None
    template: Optional[str] = None
    long_duration: bool = False
    sound: Optional[str] = None
    loop_sound: bool = False


def qualify_application_id(application_id: str, prefix: str = "") -> str:
    """Return ``"<prefix>.<id>"``, or the bare id when there is no prefix."""
    if application_id is None or not application_id.strip():
        raise EmptyApplicationId()
    app_id = application_id.strip()
    prefix = (prefix or "").strip().rstrip(".")
    return f"{prefix}.{app_id}" if prefix else app_id


def create_builder_from_options(
    options: NotificationOptions, catalog: TemplateCatalog = DEFAULT_CATALOG
) -> NotificationBuilder:
    lines: Sequence[str] = list(options.text_lines or [])
    needs_image = bool(options.image)

    info = select_template(
        options.template, line_count=len(lines), needs_image=needs_image, catalog=catalog
    )
    if info.text_slot_count != len(lines):
        raise LineCountMismatch(info.name, info.text_slot_count, len(lines))

    # Resolve the sound before touching the builder so bad input fails early
    selection = resolve_sound(options.sound)

    builder = NotificationBuilder(info)
    if needs_image:
        assert options.image is not None
        if URL_SCHEME_SEPARATOR in options.image:
            builder.set_image_from_url(options.image)
        else:
            builder.set_image_from_file(options.image)

    for line, text in enumerate(lines, start=1):
        builder.set_text_line(line, text)

    builder.set_duration(Duration.LONG if options.long_duration else Duration.NORMAL)

    if selection is not None:
        builder.set_sound(selection)
    # Only an explicitly chosen sound can loop
    if options.loop_sound and selection is not None and not isinstance(selection, Silent):
        if not options.long_duration:
            log.warning("Looping sounds are only played for long notifications")
        builder.set_sound_looping(True)

    log.debug("Configured %s builder from options", info.name)
    return builder
