"""Capability contracts for the external document tools."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from pdftranslator.documents.models import PageRange


@runtime_checkable
class DocumentTools(Protocol):
    """Decrypt, count and slice PDF documents."""

    def decrypt(self, path: Path, destination: Path) -> Path:
        """Write an unencrypted copy of *path* to *destination*; never mutate *path*."""

    def count_pages(self, path: Path) -> int:
        """Return the number of pages (>= 0)."""

    def extract_pages(self, path: Path, pages: PageRange, destination: Path) -> Path:
        """Write exactly the inclusive *pages* of *path* to *destination*."""


@runtime_checkable
class MarkupConverter(Protocol):
    """Convert one PDF into an HTML file at a deterministic path."""

    async def convert(self, pdf_path: Path, html_path: Path) -> Path:
        """Return *html_path* once it exists; raise on tool failure."""


@runtime_checkable
class Renderer(Protocol):
    """Render an HTML file back into a PDF."""

    async def render(self, html_path: Path, pdf_path: Path) -> Path | None:
        """Return *pdf_path* when produced, ``None`` on failure."""
