"""Size-bounded chunked translation with timeouts and bounded retries."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Sequence

from deep_translator.exceptions import RequestError, TooManyRequests, TranslationNotFound
import requests

from pdftranslator.concurrency import gather_ordered
from pdftranslator.config import (
    DEFAULT_MAX_CHUNK_CHARS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_PAUSE_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_RETRY_BASE_SECONDS,
)
from pdftranslator.errors import InvalidArgumentError, TranslationTransportError
from pdftranslator.markup.extractor import fragments_to_text, text_to_fragments
from pdftranslator.translation.service import TranslationService

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    TooManyRequests,
    RequestError,
    requests.ConnectionError,
    requests.Timeout,
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
)


def _status_code(exc: Exception) -> int | None:
    status_code = getattr(exc, "status_code", None)
    if status_code is None:
        response = getattr(exc, "response", None)
        status_code = getattr(response, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def _is_retryable(exc: Exception) -> bool:
    if _status_code(exc) in _RETRYABLE_STATUS_CODES:
        return True

    return isinstance(exc, _RETRYABLE_ERRORS)


def split_into_chunks(text: str, max_chunk_chars: int) -> list[str]:
    """Slice *text* into pieces of at most *max_chunk_chars* characters.

    Plain slicing: a chunk may end mid-word.
    """
    if max_chunk_chars < 1:
        raise InvalidArgumentError("max_chunk_chars must be a positive integer")
    return [text[start : start + max_chunk_chars] for start in range(0, len(text), max_chunk_chars)]


class ChunkedTranslator:
    """Translate arbitrarily long text through a size-limited service."""

    def __init__(
        self,
        service: TranslationService,
        *,
        max_chunk_chars: int = DEFAULT_MAX_CHUNK_CHARS,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_base_seconds: float = DEFAULT_RETRY_BASE_SECONDS,
        max_concurrency: int = 1,
        pause_seconds: float = DEFAULT_PAUSE_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_chunk_chars < 1:
            raise ValueError("max_chunk_chars must be positive")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if retry_base_seconds < 0:
            raise ValueError("retry_base_seconds cannot be negative")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        if pause_seconds < 0:
            raise ValueError("pause_seconds cannot be negative")

        self._service = service
        self._max_chunk_chars = max_chunk_chars
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._retry_base_seconds = retry_base_seconds
        self._max_concurrency = max_concurrency
        self._pause_seconds = pause_seconds
        self._sleep = sleep

    @property
    def max_chunk_chars(self) -> int:
        return self._max_chunk_chars

    async def pause(self, seconds: float | None = None) -> None:
        """Cooperative rate-limit pause, invoked once per logical translation step."""

        delay = self._pause_seconds if seconds is None else seconds
        if delay < 0:
            raise InvalidArgumentError("The pause before translation cannot be negative.")
        if delay:
            logger.info("Pausing %.1fs before translation", delay)
            await self._sleep(delay)

    async def detect_language(self, text: str) -> str | None:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._service.detect_language, text),
                timeout=self._timeout_seconds,
            )
        except Exception as exc:
            raise TranslationTransportError(stage="detect", message=f"Language detection failed: {exc}") from exc

    async def translate_blob(
        self,
        text: str,
        source: str,
        target: str,
        max_chunk_chars: int | None = None,
    ) -> str:
        """Translate *text* chunk by chunk and join the results in order.

        A chunk the service returns unchanged (or empty) is kept verbatim. Any
        chunk that still fails after the retry budget raises
        :class:`TranslationTransportError`; nothing partial is returned.
        """

        chunks = split_into_chunks(text, max_chunk_chars or self._max_chunk_chars)
        if not chunks:
            return ""

        total = len(chunks)
        translated = await gather_ordered(
            chunks,
            lambda index, chunk: self._translate_chunk(index, total, chunk, source, target),
            limit=self._max_concurrency,
        )
        return "".join(translated)

    async def translate_fragments(self, fragments: Sequence[str], source: str, target: str) -> list[str]:
        """Translate a segment's fragments as one newline-joined blob."""

        if not fragments:
            return []
        translated = await self.translate_blob(fragments_to_text(fragments), source, target)
        return text_to_fragments(translated)

    async def _translate_chunk(self, index: int, total: int, chunk: str, source: str, target: str) -> str:
        attempts = 0
        last_error: Exception | None = None

        for attempt in range(self._max_retries + 1):
            attempts += 1
            try:
                translated = await asyncio.wait_for(
                    asyncio.to_thread(self._service.translate, chunk, source, target),
                    timeout=self._timeout_seconds,
                )
            except TranslationNotFound:
                # The service answered but had nothing to offer for this text.
                logger.warning("No translation for chunk %d/%d; keeping original text", index + 1, total)
                return chunk
            except Exception as exc:
                last_error = exc
                should_retry = attempt < self._max_retries and _is_retryable(exc)
                if not should_retry:
                    break
                delay = self._retry_base_seconds * (2**attempt)
                logger.warning(
                    "Chunk %d/%d failed (%s); retrying in %.2fs",
                    index + 1,
                    total,
                    type(exc).__name__,
                    delay,
                )
                await self._sleep(delay)
                continue

            if not translated or translated == chunk:
                return chunk
            return translated

        detail = str(last_error) if last_error is not None else "unknown translation error"
        raise TranslationTransportError(
            stage=f"chunk {index + 1}/{total}",
            message=f"Translation request failed after {attempts} attempt(s): {detail}",
        ) from last_error
