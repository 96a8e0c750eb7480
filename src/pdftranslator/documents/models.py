"""Data structures describing source documents and their page segments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PageRange:
    """Inclusive, 1-based page interval."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 1 or self.end < self.start:
            raise ValueError(f"Invalid page range {self.start}-{self.end}")

    @property
    def page_count(self) -> int:
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True, slots=True)
class Segment:
    """A contiguous page slice of a document, processed independently.

    ``is_split_artifact`` is True when the file was produced by the splitter
    and is therefore owned (and later deleted) by the running pipeline.
    """

    index: int
    path: Path
    pages: PageRange
    is_split_artifact: bool = False

    @property
    def name(self) -> str:
        return self.path.stem
