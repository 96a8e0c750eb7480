"""Async subprocess runner for the external conversion tools."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging


DEFAULT_TOOL_TIMEOUT_SECONDS = 300.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ToolOutcome:
    ok: bool
    stdout: str
    stderr: str
    returncode: int | None = None


async def run_tool(
    *args: str,
    timeout_seconds: float = DEFAULT_TOOL_TIMEOUT_SECONDS,
) -> ToolOutcome:
    """Run an external executable and capture its output.

    A missing executable, a non-zero exit status and a timeout all produce a
    failed :class:`ToolOutcome`; the process is killed when it overruns.
    """
    if not args:
        raise ValueError("run_tool requires an executable")

    logger.debug("Running %s", " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError:
        return ToolOutcome(False, "", f"Executable not found: {args[0]}")

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(proc.communicate(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.communicate()
        return ToolOutcome(False, "", f"Timed out after {int(timeout_seconds)}s: {' '.join(args)}")

    stdout_text = stdout_bytes.decode("utf-8", errors="replace")
    stderr_text = stderr_bytes.decode("utf-8", errors="replace").strip()

    if proc.returncode != 0:
        message = stderr_text or stdout_text.strip() or f"Command failed: {' '.join(args)}"
        return ToolOutcome(False, stdout_text, message, proc.returncode)

    return ToolOutcome(True, stdout_text, stderr_text, proc.returncode)
