"""Domain models for podlint."""

from podlint.models.errors import ValidationError, ValidationResult
from podlint.models.nodes import Node, NodeKind

__all__ = [
    "Node",
    "NodeKind",
    "ValidationError",
    "ValidationResult",
]
