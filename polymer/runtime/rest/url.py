"""URL construction with slug substitution.

Path components of ``endpoint_url`` that start with ``:`` name a slug path.
For ``/users/:id/repos`` and ``slug={"id": 42}`` the populated path is
``/users/42/repos``. Components whose slug value is not valid are dropped, so
``/users/:id`` with no slug becomes ``/users`` (the collection).
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from urllib.parse import quote
from uuid import UUID

from ...utils.keypath import MISSING, resolve_key_path

if TYPE_CHECKING:
    from ...core.descriptor import EndpointDescriptor

SLUG_PREFIX = ":"

_SCALAR_SLUGS = (str, int, float, Decimal, UUID, date, datetime)


def default_slug_value(slug: Any, slug_path: str | None) -> Any:
    """Look ``slug_path`` up on ``slug``.

    Scalar slugs (strings, numbers, ids) substitute themselves. Mappings and
    objects are walked with the dotted ``slug_path``.
    """
    if slug is None:
        return None
    if isinstance(slug, _SCALAR_SLUGS):
        return slug
    if not slug_path:
        return None
    value = resolve_key_path(slug, slug_path)
    return None if value is MISSING else value


def _format_slug_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


def populate_path(descriptor: EndpointDescriptor, slug: Any) -> str:
    """Substitute slug values into the descriptor's ``endpoint_url``."""
    value_for_path = descriptor.slug_value_for_path or default_slug_value
    validity_check = descriptor.slug_validity_check

    components: list[str] = []
    for component in descriptor.endpoint_url.split("/"):
        if not component.startswith(SLUG_PREFIX):
            components.append(component)
            continue
        slug_path = component[len(SLUG_PREFIX) :] or None
        value = value_for_path(slug, slug_path)
        if validity_check is not None:
            valid = validity_check(slug, slug_path)
        else:
            valid = value is not None
        if valid and value is not None:
            components.append(_format_slug_value(value))
    return "/".join(components)


def build_url(descriptor: EndpointDescriptor, slug: Any) -> str:
    """Absolute request URL for the descriptor and slug.

    An ``endpoint_url`` that is already absolute ignores ``base_url``.
    """
    path = populate_path(descriptor, slug)
    if path.startswith(("http://", "https://")):
        return path
    base = descriptor.base_url.rstrip("/")
    path = path.lstrip("/")
    return f"{base}/{path}" if path else base
