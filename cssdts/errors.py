"""Structured diagnostics and exception hierarchy for cssdts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Diagnostic:
    """Machine-readable diagnostic emitted by generation phases."""

    code: str
    message: str
    hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize the diagnostic for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
        }


class DtsError(Exception):
    """Base declaration generation error carrying a code and hint."""

    def __init__(self, code: str, message: str, hint: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint

    def to_diagnostic(self) -> Diagnostic:
        """Convert exception into serializable diagnostic."""
        return Diagnostic(code=self.code, message=self.message, hint=self.hint)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SourceMapError(DtsError):
    """Raised for malformed or unsupported source map payloads."""


class OptionsError(DtsError):
    """Raised for invalid configuration or export records."""


class TemplateError(DtsError):
    """Raised when a custom template cannot be resolved or misbehaves."""


class GenerationError(DtsError):
    """Raised when a generation precondition is violated."""


class CLIError(DtsError):
    """Raised by CLI usage or orchestration failures."""


def format_diagnostic(diag: Diagnostic) -> str:
    """Format diagnostic into a stable human-readable line."""
    hint = f" Hint: {diag.hint}" if diag.hint else ""
    return f"{diag.code}: {diag.message}{hint}"
