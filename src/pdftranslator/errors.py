"""Domain errors raised by the translation pipeline and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class PdfTranslatorError(Exception):
    """Base class for every error raised by this package."""


@dataclass(slots=True)
class InvalidArgumentError(PdfTranslatorError):
    """Wrong type, arity, extension or range for a caller-supplied value."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class UnsupportedLanguageError(PdfTranslatorError):
    """Language code missing from the supported table.

    ``suggestion`` is set only when the rejected value matched a language's
    display name, in which case it carries the code the caller should use.
    """

    code: str
    role: str
    message: str
    suggestion: str | None = None

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class SourceNotFoundError(PdfTranslatorError):
    path: Path

    def __str__(self) -> str:
        return f"The PDF file '{self.path}' does not exist."


@dataclass(slots=True)
class PageCountExceededError(PdfTranslatorError):
    page_count: int
    limit: int

    def __str__(self) -> str:
        return (
            f"The PDF file has {self.page_count} pages, which exceeds the maximum "
            f"allowed page count of {self.limit}."
        )


@dataclass(slots=True)
class ExternalToolError(PdfTranslatorError):
    """Decrypt, split, convert or render step failed."""

    tool: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (tool={self.tool})"


@dataclass(slots=True)
class TranslationTransportError(PdfTranslatorError):
    """Remote translation call failed after the retry budget was spent."""

    stage: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (stage={self.stage})"


@dataclass(slots=True)
class IncompleteOutputError(PdfTranslatorError):
    expected: int
    produced: tuple[Path, ...]

    def __str__(self) -> str:
        produced = ", ".join(str(path) for path in self.produced) or "nothing"
        return f"Expected {self.expected} output files, produced: {produced}"


@dataclass(slots=True)
class PipelineCancelledError(PdfTranslatorError):
    stage: str

    def __str__(self) -> str:
        return f"Translation cancelled after stage '{self.stage}'"
