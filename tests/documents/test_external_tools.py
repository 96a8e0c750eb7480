from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from pdftranslator.documents.converter import Pdf2HtmlConverter, WkhtmltopdfRenderer
from pdftranslator.documents.tools import run_tool
from pdftranslator.errors import ExternalToolError

_EXEC = "pdftranslator.documents.tools.asyncio.create_subprocess_exec"


class _DummyProc:
    def __init__(
        self,
        *,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        delay_seconds: float = 0.0,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self.returncode = returncode
        self._delay_seconds = delay_seconds
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        if self._delay_seconds > 0 and not self.killed:
            await asyncio.sleep(self._delay_seconds)
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True


@pytest.mark.asyncio
async def test_run_tool_captures_output() -> None:
    with patch(_EXEC, new=AsyncMock(return_value=_DummyProc(stdout=b"done\n", stderr=b" note "))):
        outcome = await run_tool("tool", "--flag")

    assert outcome.ok is True
    assert outcome.stdout == "done\n"
    assert outcome.stderr == "note"
    assert outcome.returncode == 0


@pytest.mark.asyncio
async def test_run_tool_reports_non_zero_exit() -> None:
    proc = _DummyProc(stderr=b"bad input", returncode=3)
    with patch(_EXEC, new=AsyncMock(return_value=proc)):
        outcome = await run_tool("tool")

    assert outcome.ok is False
    assert outcome.stderr == "bad input"
    assert outcome.returncode == 3


@pytest.mark.asyncio
async def test_run_tool_kills_process_on_timeout() -> None:
    proc = _DummyProc(delay_seconds=1.0)
    with patch(_EXEC, new=AsyncMock(return_value=proc)):
        outcome = await run_tool("slow-tool", timeout_seconds=0.05)

    assert outcome.ok is False
    assert proc.killed is True
    assert outcome.stderr.startswith("Timed out after")


@pytest.mark.asyncio
async def test_run_tool_missing_executable() -> None:
    with patch(_EXEC, new=AsyncMock(side_effect=FileNotFoundError("missing"))):
        outcome = await run_tool("no-such-binary")

    assert outcome.ok is False
    assert "Executable not found: no-such-binary" in outcome.stderr


@pytest.mark.asyncio
async def test_pdf2html_invocation_and_output(tmp_path: Path) -> None:
    calls: list[tuple[Any, ...]] = []

    async def _fake_exec(*args, **kwargs):
        calls.append(args)
        dest_dir = Path(args[args.index("--dest-dir") + 1])
        (dest_dir / args[-1]).write_text("<html><body><p>Hi</p></body></html>", encoding="utf-8")
        return _DummyProc()

    html_path = tmp_path / "html" / "doc.html"
    with patch(_EXEC, new=AsyncMock(side_effect=_fake_exec)):
        result = await Pdf2HtmlConverter(binary="pdf2htmlEX").convert(tmp_path / "doc.pdf", html_path)

    assert result == html_path
    assert html_path.is_file()
    command = calls[0]
    assert command[0] == "pdf2htmlEX"
    assert "--process-outline" in command
    assert command[-2] == str(tmp_path / "doc.pdf")
    assert command[-1] == "doc.html"


@pytest.mark.asyncio
async def test_pdf2html_failure_raises(tmp_path: Path) -> None:
    with patch(_EXEC, new=AsyncMock(return_value=_DummyProc(stderr=b"boom", returncode=1))):
        with pytest.raises(ExternalToolError) as exc_info:
            await Pdf2HtmlConverter().convert(tmp_path / "doc.pdf", tmp_path / "doc.html")

    assert "boom" in str(exc_info.value)


@pytest.mark.asyncio
async def test_pdf2html_without_output_file_raises(tmp_path: Path) -> None:
    with patch(_EXEC, new=AsyncMock(return_value=_DummyProc())):
        with pytest.raises(ExternalToolError):
            await Pdf2HtmlConverter().convert(tmp_path / "doc.pdf", tmp_path / "doc.html")


def test_renderer_command_uses_virtual_display_when_enabled(tmp_path: Path) -> None:
    with_xvfb = WkhtmltopdfRenderer().command(tmp_path / "a.html", tmp_path / "a.pdf")
    without_xvfb = WkhtmltopdfRenderer(use_xvfb=False).command(tmp_path / "a.html", tmp_path / "a.pdf")

    assert with_xvfb[:3] == ["xvfb-run", "-a", "wkhtmltopdf"]
    assert without_xvfb[0] == "wkhtmltopdf"
    assert "--no-images" in without_xvfb
    assert without_xvfb[-2:] == [str(tmp_path / "a.html"), str(tmp_path / "a.pdf")]


@pytest.mark.asyncio
async def test_renderer_accepts_pdf_written_despite_error_exit(tmp_path: Path) -> None:
    pdf_path = tmp_path / "out.pdf"

    async def _fake_exec(*args, **kwargs):
        Path(args[-1]).write_bytes(b"%PDF-1.4")
        return _DummyProc(stderr=b"Exit with code 1 due to network error", returncode=1)

    with patch(_EXEC, new=AsyncMock(side_effect=_fake_exec)):
        result = await WkhtmltopdfRenderer(use_xvfb=False).render(tmp_path / "out.html", pdf_path)

    assert result == pdf_path


@pytest.mark.asyncio
async def test_renderer_returns_none_when_nothing_is_written(tmp_path: Path) -> None:
    with patch(_EXEC, new=AsyncMock(return_value=_DummyProc(returncode=1))):
        result = await WkhtmltopdfRenderer(use_xvfb=False).render(tmp_path / "out.html", tmp_path / "out.pdf")

    assert result is None
