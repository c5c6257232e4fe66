"""Pure format predicates over scalar text."""

from __future__ import annotations

import re

IMAGE_REGISTRY = "registry.bigbrother.io"

PROTOCOLS = frozenset({"TCP", "UDP"})
OPERATING_SYSTEMS = frozenset({"linux", "windows"})
API_VERSIONS = frozenset({"v1"})
KINDS = frozenset({"Pod"})

MIN_PORT = 1
MAX_PORT = 65535

_IDENTIFIER_RE = re.compile(r"[a-z]+(?:_[a-z]+)*")
_IMAGE_RE = re.compile(
    re.escape(IMAGE_REGISTRY) + r"/[a-zA-Z0-9][a-zA-Z0-9_.-]+:[a-zA-Z0-9_.-]+"
)
_MEMORY_RE = re.compile(r"[0-9]+(?:Gi|Mi|Ki)")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def is_identifier(text: str) -> bool:
    """snake_case: lowercase words joined by single underscores."""
    return _IDENTIFIER_RE.fullmatch(text) is not None


def is_image_reference(text: str) -> bool:
    return _IMAGE_RE.fullmatch(text) is not None


def is_memory_quantity(text: str) -> bool:
    return _MEMORY_RE.fullmatch(text) is not None


def parse_int(text: str) -> int | None:
    """Parse a base-10 integer, or return ``None``."""
    if _INT_RE.fullmatch(text) is None:
        return None
    return int(text)


def is_port(value: int) -> bool:
    return MIN_PORT <= value <= MAX_PORT


def is_absolute_path(text: str) -> bool:
    return text.startswith("/")


def is_one_of(text: str, allowed: frozenset[str]) -> bool:
    return text in allowed
