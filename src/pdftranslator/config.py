"""Runtime configuration for the PDF translation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping


DEFAULT_WORK_DIR = ".pdftranslator-work"
DEFAULT_MAX_PAGES = 100
DEFAULT_PAGES_PER_SEGMENT = 20
DEFAULT_MAX_CHUNK_CHARS = 3700
DEFAULT_PAUSE_SECONDS = 1.0
DEFAULT_EXPIRATION_SECONDS = 3600
DEFAULT_REQUEST_TIMEOUT_SECONDS = 60.0
DEFAULT_TOOL_TIMEOUT_SECONDS = 300.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BASE_SECONDS = 0.5
DEFAULT_MAX_CONCURRENCY = 1
DEFAULT_CONVERTER_BINARY = "pdf2htmlEX"
DEFAULT_RENDERER_BINARY = "wkhtmltopdf"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_positive_int(*, name: str, raw_value: str, minimum: int = 1) -> int:
    try:
        value = int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_positive_float(*, name: str, raw_value: str, minimum: float = 0.0) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def _parse_bool(*, name: str, raw_value: str) -> bool:
    lowered = raw_value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag")


@dataclass(frozen=True, slots=True)
class TranslatorSettings:
    """Validated pipeline settings; defaults mirror the service limits."""

    work_dir: Path = Path(DEFAULT_WORK_DIR)
    max_pages: int = DEFAULT_MAX_PAGES
    pages_per_segment: int = DEFAULT_PAGES_PER_SEGMENT
    max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS
    pause_seconds: float = DEFAULT_PAUSE_SECONDS
    expiration_seconds: int = DEFAULT_EXPIRATION_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    tool_timeout_seconds: float = DEFAULT_TOOL_TIMEOUT_SECONDS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_seconds: float = DEFAULT_RETRY_BASE_SECONDS
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    converter_binary: str = DEFAULT_CONVERTER_BINARY
    renderer_binary: str = DEFAULT_RENDERER_BINARY
    use_xvfb: bool = True

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TranslatorSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        def _raw(name: str, default: object) -> str:
            value = source.get(name, str(default)).strip()
            if not value:
                raise ValueError(f"{name} cannot be empty")
            return value

        work_dir_raw = _raw("PDFTRANSLATOR_WORK_DIR", DEFAULT_WORK_DIR)
        converter_binary = _raw("PDFTRANSLATOR_CONVERTER", DEFAULT_CONVERTER_BINARY)
        renderer_binary = _raw("PDFTRANSLATOR_RENDERER", DEFAULT_RENDERER_BINARY)

        return cls(
            work_dir=Path(work_dir_raw),
            max_pages=_parse_positive_int(
                name="PDFTRANSLATOR_MAX_PAGES",
                raw_value=_raw("PDFTRANSLATOR_MAX_PAGES", DEFAULT_MAX_PAGES),
            ),
            pages_per_segment=_parse_positive_int(
                name="PDFTRANSLATOR_PAGES_PER_SEGMENT",
                raw_value=_raw("PDFTRANSLATOR_PAGES_PER_SEGMENT", DEFAULT_PAGES_PER_SEGMENT),
            ),
            max_chunk_chars=_parse_positive_int(
                name="PDFTRANSLATOR_MAX_CHUNK_CHARS",
                raw_value=_raw("PDFTRANSLATOR_MAX_CHUNK_CHARS", DEFAULT_MAX_CHUNK_CHARS),
                minimum=100,
            ),
            pause_seconds=_parse_positive_float(
                name="PDFTRANSLATOR_PAUSE_SECONDS",
                raw_value=_raw("PDFTRANSLATOR_PAUSE_SECONDS", DEFAULT_PAUSE_SECONDS),
            ),
            expiration_seconds=_parse_positive_int(
                name="PDFTRANSLATOR_EXPIRATION_SECONDS",
                raw_value=_raw("PDFTRANSLATOR_EXPIRATION_SECONDS", DEFAULT_EXPIRATION_SECONDS),
            ),
            request_timeout_seconds=_parse_positive_float(
                name="PDFTRANSLATOR_REQUEST_TIMEOUT_SECONDS",
                raw_value=_raw("PDFTRANSLATOR_REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS),
                minimum=0.1,
            ),
            tool_timeout_seconds=_parse_positive_float(
                name="PDFTRANSLATOR_TOOL_TIMEOUT_SECONDS",
                raw_value=_raw("PDFTRANSLATOR_TOOL_TIMEOUT_SECONDS", DEFAULT_TOOL_TIMEOUT_SECONDS),
                minimum=0.1,
            ),
            max_retries=_parse_positive_int(
                name="PDFTRANSLATOR_MAX_RETRIES",
                raw_value=_raw("PDFTRANSLATOR_MAX_RETRIES", DEFAULT_MAX_RETRIES),
                minimum=0,
            ),
            retry_base_seconds=_parse_positive_float(
                name="PDFTRANSLATOR_RETRY_BASE_SECONDS",
                raw_value=_raw("PDFTRANSLATOR_RETRY_BASE_SECONDS", DEFAULT_RETRY_BASE_SECONDS),
            ),
            max_concurrency=_parse_positive_int(
                name="PDFTRANSLATOR_MAX_CONCURRENCY",
                raw_value=_raw("PDFTRANSLATOR_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY),
            ),
            converter_binary=converter_binary,
            renderer_binary=renderer_binary,
            use_xvfb=_parse_bool(
                name="PDFTRANSLATOR_USE_XVFB",
                raw_value=_raw("PDFTRANSLATOR_USE_XVFB", "true"),
            ),
        )
