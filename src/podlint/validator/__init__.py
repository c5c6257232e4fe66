"""Pod manifest validation engine."""

from podlint.validator.collector import ErrorCollector
from podlint.validator.fields import field_map
from podlint.validator.schema import CpuProfile, PodValidator, validate_documents

__all__ = [
    "CpuProfile",
    "ErrorCollector",
    "PodValidator",
    "field_map",
    "validate_documents",
]
