"""pdf2htmlEX and wkhtmltopdf wrappers for the PDF <-> HTML round trip."""

from __future__ import annotations

import logging
from pathlib import Path

from pdftranslator.documents.tools import DEFAULT_TOOL_TIMEOUT_SECONDS, run_tool
from pdftranslator.errors import ExternalToolError

logger = logging.getLogger(__name__)

_PDF2HTML_OPTIONS = ("--process-outline", "0", "--fit-width", "1024", "--space-as-offset", "1")
_WKHTMLTOPDF_OPTIONS = ("--no-images", "--quiet", "--dpi", "300")


class Pdf2HtmlConverter:
    """Convert a PDF into one self-contained HTML file with pdf2htmlEX."""

    def __init__(
        self,
        *,
        binary: str = "pdf2htmlEX",
        timeout_seconds: float = DEFAULT_TOOL_TIMEOUT_SECONDS,
    ) -> None:
        self._binary = binary
        self._timeout_seconds = timeout_seconds

    async def convert(self, pdf_path: Path, html_path: Path) -> Path:
        html_path.parent.mkdir(parents=True, exist_ok=True)
        outcome = await run_tool(
            self._binary,
            *_PDF2HTML_OPTIONS,
            "--dest-dir",
            str(html_path.parent),
            str(pdf_path),
            html_path.name,
            timeout_seconds=self._timeout_seconds,
        )
        if not outcome.ok:
            raise ExternalToolError(self._binary, f"Failed to convert '{pdf_path.name}' to HTML: {outcome.stderr}")
        if not html_path.is_file():
            raise ExternalToolError(self._binary, f"No HTML produced for '{pdf_path.name}'")

        logger.debug("Converted %s -> %s", pdf_path.name, html_path.name)
        return html_path


class WkhtmltopdfRenderer:
    """Render HTML to PDF with wkhtmltopdf, optionally inside a virtual X server."""

    def __init__(
        self,
        *,
        binary: str = "wkhtmltopdf",
        use_xvfb: bool = True,
        timeout_seconds: float = DEFAULT_TOOL_TIMEOUT_SECONDS,
    ) -> None:
        self._binary = binary
        self._use_xvfb = use_xvfb
        self._timeout_seconds = timeout_seconds

    def command(self, html_path: Path, pdf_path: Path) -> list[str]:
        prefix = ["xvfb-run", "-a"] if self._use_xvfb else []
        return [*prefix, self._binary, *_WKHTMLTOPDF_OPTIONS, str(html_path), str(pdf_path)]

    async def render(self, html_path: Path, pdf_path: Path) -> Path | None:
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        outcome = await run_tool(*self.command(html_path, pdf_path), timeout_seconds=self._timeout_seconds)
        if not outcome.ok:
            logger.warning("Renderer reported an error for %s: %s", html_path.name, outcome.stderr)

        # wkhtmltopdf exits non-zero on recoverable load errors while still writing the PDF.
        if pdf_path.is_file():
            return pdf_path
        logger.error("Renderer produced no PDF for %s", html_path.name)
        return None
