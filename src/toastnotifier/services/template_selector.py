"""Pick a template by name or infer it from the shape of the input."""
from __future__ import annotations

import logging
from typing import Optional

from ..errors import AmbiguousTemplate, NoMatchingTemplate
from ..models.templates import DEFAULT_CATALOG, TemplateCatalog, TemplateInfo

log = logging.getLogger(__name__)


def select_template(
    name: Optional[str] = None,
    *,
    line_count: int = 0,
    needs_image: bool = False,
    catalog: TemplateCatalog = DEFAULT_CATALOG,
) -> TemplateInfo:
    """Return the template to build from.

    A non-blank ``name`` is looked up case-insensitively and wins over any
    shape match. Otherwise exactly one catalog entry must have ``line_count``
    text slots and an image slot iff ``needs_image``.
    """
    if name is not None and name.strip():
        info = catalog.lookup(name)
        log.debug("Using explicitly selected template %s", info.name)
        return info

    candidates = catalog.matching(line_count, needs_image)
    if not candidates:
        raise NoMatchingTemplate(line_count, needs_image)
    if len(candidates) > 1:
        raise AmbiguousTemplate(line_count, needs_image, [c.name for c in candidates])

    info = candidates[0]
    log.debug(
        "Inferred template %s for %s line(s), image=%s", info.name, line_count, needs_image
    )
    return info
