"""Error taxonomy for the blueprint pipeline."""

from __future__ import annotations


class BlueprintError(Exception):
    """Base class for failures while producing a blueprint report."""


class ValidationError(BlueprintError):
    """Quiz answers are missing or malformed; the user must finish the quiz."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class RenderError(BlueprintError):
    """Measuring or drawing a block failed; the caller may simply retry."""
