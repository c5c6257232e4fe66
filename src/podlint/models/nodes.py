"""Immutable document tree nodes. Every node remembers the source line it came from."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum


class NodeKind(StrEnum):
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class Node:
    """A parsed YAML node.

    Scalars carry their text in ``value``.  Mappings carry alternating
    key/value nodes in ``children`` (keys are always scalars); sequences
    carry their items.  ``line`` is 1-based.
    """

    kind: NodeKind
    line: int
    value: str = ""
    children: tuple[Node, ...] = ()

    @classmethod
    def scalar(cls, value: str, line: int = 1) -> Node:
        return cls(kind=NodeKind.SCALAR, line=line, value=value)

    @classmethod
    def mapping(cls, pairs: list[tuple[Node, Node]], line: int = 1) -> Node:
        children: list[Node] = []
        for key, value in pairs:
            children.extend((key, value))
        return cls(kind=NodeKind.MAPPING, line=line, children=tuple(children))

    @classmethod
    def sequence(cls, items: list[Node], line: int = 1) -> Node:
        return cls(kind=NodeKind.SEQUENCE, line=line, children=tuple(items))

    @property
    def is_scalar(self) -> bool:
        return self.kind is NodeKind.SCALAR

    @property
    def is_mapping(self) -> bool:
        return self.kind is NodeKind.MAPPING

    @property
    def is_sequence(self) -> bool:
        return self.kind is NodeKind.SEQUENCE

    def pairs(self) -> Iterator[tuple[Node, Node]]:
        """Yield (key, value) pairs of a mapping in source order."""
        if not self.is_mapping:
            return
        for i in range(0, len(self.children) - 1, 2):
            yield self.children[i], self.children[i + 1]
