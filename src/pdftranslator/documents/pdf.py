"""PyMuPDF-backed decrypt, page-count and page-extraction tools."""

from __future__ import annotations

import logging
from pathlib import Path

import pymupdf

from pdftranslator.documents.models import PageRange
from pdftranslator.errors import ExternalToolError

logger = logging.getLogger(__name__)

_TOOL_NAME = "pymupdf"


def _open(path: Path) -> pymupdf.Document:
    try:
        doc = pymupdf.open(path)
    except (RuntimeError, ValueError) as exc:
        raise ExternalToolError(_TOOL_NAME, f"Failed to open the PDF file '{path}': {exc}") from exc

    # Documents protected only by an owner password open with an empty user password.
    if doc.needs_pass and not doc.authenticate(""):
        doc.close()
        raise ExternalToolError(_TOOL_NAME, f"Failed to decrypt the PDF file '{path}'.")
    return doc


class PyMuPDFDocumentTools:
    """In-process replacement for the qpdf/pdftk command pair."""

    def decrypt(self, path: Path, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with _open(path) as doc:
            if (doc.metadata or {}).get("encryption"):
                logger.info("Removing encryption from %s", path.name)
            try:
                doc.save(str(destination), encryption=pymupdf.PDF_ENCRYPT_NONE, garbage=1)
            except (RuntimeError, ValueError) as exc:
                raise ExternalToolError(_TOOL_NAME, f"Failed to write decrypted copy of '{path}': {exc}") from exc
        return destination

    def count_pages(self, path: Path) -> int:
        with _open(path) as doc:
            return doc.page_count

    def extract_pages(self, path: Path, pages: PageRange, destination: Path) -> Path:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with _open(path) as source:
            if pages.end > source.page_count:
                raise ExternalToolError(
                    _TOOL_NAME,
                    f"Page range {pages} is outside '{path}' ({source.page_count} pages)",
                )
            with pymupdf.open() as part:
                part.insert_pdf(source, from_page=pages.start - 1, to_page=pages.end - 1)
                try:
                    part.save(str(destination), garbage=1)
                except (RuntimeError, ValueError) as exc:
                    raise ExternalToolError(_TOOL_NAME, f"Failed to write pages {pages} of '{path}': {exc}") from exc
        return destination
