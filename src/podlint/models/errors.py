"""Structured diagnostics with source line attribution."""

from __future__ import annotations

from pydantic import BaseModel


class ValidationError(BaseModel):
    """A single rule violation. ``line == 0`` means no specific line."""

    file: str
    line: int = 0
    message: str

    def render(self) -> str:
        if self.line > 0:
            return f"{self.file}:{self.line} {self.message}"
        return f"{self.file} {self.message}"

    def __str__(self) -> str:
        return self.render()


class ValidationResult(BaseModel):
    """Result of validating one manifest."""

    file: str
    errors: list[ValidationError] = []

    @property
    def valid(self) -> bool:
        return not self.errors

    def render(self) -> list[str]:
        return [error.render() for error in self.errors]
