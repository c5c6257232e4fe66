"""Ordered sink for validation errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from podlint.models.errors import ValidationError

logger = logging.getLogger("podlint.validator")


class ErrorCollector:
    """Append-only list of diagnostics for one file, kept in the order recorded."""

    def __init__(self, file: str) -> None:
        self.file = file
        self._errors: list[ValidationError] = []

    def add(self, message: str, line: int = 0) -> None:
        error = ValidationError(file=self.file, line=line, message=message)
        logger.debug("recorded %s", error)
        self._errors.append(error)

    @property
    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(list(self._errors))

    def __bool__(self) -> bool:
        return bool(self._errors)
