"""Helpers for record identifiers received over the wire."""

import re
from uuid import UUID

from ..core.exceptions import NotFoundError


def parse_uuid(value: str, resource_type: str) -> UUID:
    """Parse ``value`` as a UUID; an unparseable ID cannot name an existing record."""
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise NotFoundError(resource_type=resource_type, resource_id=str(value))


_SLUG_DROP = re.compile(r"[^a-z0-9\s-]")
_SLUG_SPACES = re.compile(r"\s+")
_SLUG_DASHES = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    Derive a URL slug from a title.

    Lower-cases, drops characters outside ``[a-z0-9 -]``, turns whitespace
    runs into ``-`` and collapses repeated dashes.

    >>> slugify("Serengeti & Ngorongoro  Safari")
    'serengeti-ngorongoro-safari'
    """
    slug = _SLUG_DROP.sub("", title.strip().lower())
    slug = _SLUG_SPACES.sub("-", slug)
    return _SLUG_DASHES.sub("-", slug).strip("-")
