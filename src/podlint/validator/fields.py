"""Keyed access to the fields of a mapping node."""

from __future__ import annotations

from podlint.models.nodes import Node


def field_map(node: Node) -> dict[str, Node]:
    """Return key text -> value node for a mapping.

    A non-mapping node yields an empty dict.  When a key repeats, the last
    value wins.
    """
    return {key.value: value for key, value in node.pairs()}
