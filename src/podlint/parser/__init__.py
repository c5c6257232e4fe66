"""YAML parsing with line fidelity for podlint."""

from podlint.parser.loader import DocumentLoadError, TrackedLoader, YAMLSafetyError

__all__ = [
    "DocumentLoadError",
    "TrackedLoader",
    "YAMLSafetyError",
]
