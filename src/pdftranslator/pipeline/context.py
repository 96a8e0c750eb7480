"""Immutable state threaded through the translation stages."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from pdftranslator.documents.models import Segment
from pdftranslator.errors import IncompleteOutputError, InvalidArgumentError

# Translated HTML plus rendered PDF.
EXPECTED_OUTPUT_COUNT = 2


class Stage(str, Enum):
    VALIDATED = "validated"
    FILE_CHECKED = "file_checked"
    CONDITIONS_CHECKED = "conditions_checked"
    SPLIT = "split"
    CONVERTED = "converted"
    PAUSED = "paused"
    EXTRACTED = "extracted"
    TRANSLATED = "translated"
    ASSEMBLED = "assembled"
    OUTPUT_WRITTEN = "output_written"
    CLEANED = "cleaned"


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    """What the caller asks for; overrides fall back to settings when None."""

    source_path: Path
    output_path: Path
    target_lang: str
    source_lang: str = ""
    max_pages: int | None = None
    pages_per_segment: int | None = None
    pause_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class RunContext:
    run_id: str
    source_path: Path
    output_path: Path
    source_lang: str
    target_lang: str
    max_pages: int
    pages_per_segment: int
    pause_seconds: float | None = None
    stage: Stage = Stage.VALIDATED
    decrypted_path: Path | None = None
    page_count: int | None = None
    segments: tuple[Segment, ...] = ()
    markup_paths: tuple[Path, ...] = ()
    original_fragments: tuple[tuple[str, ...], ...] = ()
    translated_fragments: tuple[tuple[str, ...], ...] = ()
    detected_language: str | None = None
    output_paths: tuple[Path, ...] = ()

    @property
    def html_output_path(self) -> Path:
        return self.output_path.with_suffix(".html")

    def require(self, stage: Stage) -> None:
        """Raise unless the run currently sits at *stage*."""
        if self.stage is not stage:
            raise InvalidArgumentError(
                f"Stage '{self.stage.value}' cannot be followed by this step; expected '{stage.value}'."
            )

    def advance(self, stage: Stage, **changes: object) -> RunContext:
        return replace(self, stage=stage, **changes)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    success: bool
    output_paths: tuple[Path, ...]
    run_id: str
    page_count: int | None = None
    segment_count: int = 0
    detected_language: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "paths": [str(path) for path in self.output_paths],
            "run_id": self.run_id,
            "page_count": self.page_count,
            "segment_count": self.segment_count,
            "detected_language": self.detected_language,
        }

    def raise_for_status(self) -> None:
        if not self.success:
            raise IncompleteOutputError(expected=EXPECTED_OUTPUT_COUNT, produced=self.output_paths)
