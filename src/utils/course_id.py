"""
Deterministic course ids.

A course id is a readable slug of the course name followed by 8 hex characters of a SHA-256 over the coordinates and
the name, e.g. "central-park-1a2b3c4d". The same name and coordinates always give the same id.
"""

import hashlib
import re
from typing import Optional, Protocol

UNKNOWN_NAME = "unknown"
HASH_LENGTH = 8

_NON_ALPHANUMERIC = re.compile(r"[\W_]+")


class Located(Protocol):
    name: Optional[str]
    latitude: float
    longitude: float


def derive_id(name: Optional[str], latitude: float, longitude: float) -> str:
    slug = slugify(name or UNKNOWN_NAME)
    digest = short_hash(f"{float(latitude)}-{float(longitude)}-{name or ''}")
    return f"{slug}-{digest}"


def course_id_for(item: Located) -> str:
    """Course id of a map search result (anything with a name and coordinates)."""
    return derive_id(item.name, item.latitude, item.longitude)


def slugify(text: str) -> str:
    """'  Central Park! ' -> 'central-park'"""
    lowered = text.lower().strip()
    return "-".join(part for part in _NON_ALPHANUMERIC.split(lowered) if part)


def short_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:HASH_LENGTH].lower()
