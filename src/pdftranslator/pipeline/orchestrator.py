"""Stage-by-stage PDF translation: decrypt, split, convert, translate, reassemble."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
import secrets
import threading
from typing import Any, Callable

from pdftranslator.concurrency import gather_ordered
from pdftranslator.config import TranslatorSettings
from pdftranslator.documents.base import DocumentTools, MarkupConverter, Renderer
from pdftranslator.documents.converter import Pdf2HtmlConverter, WkhtmltopdfRenderer
from pdftranslator.documents.models import Segment
from pdftranslator.documents.pdf import PyMuPDFDocumentTools
from pdftranslator.documents.splitter import split_document
from pdftranslator.errors import (
    ExternalToolError,
    InvalidArgumentError,
    PageCountExceededError,
    PdfTranslatorError,
    PipelineCancelledError,
    SourceNotFoundError,
    TranslationTransportError,
)
from pdftranslator.languages import language_name, validate_language_pair
from pdftranslator.markup.extractor import extract_fragments, fragments_to_text, parse_markup
from pdftranslator.markup.reinjector import reinject_with_report
from pdftranslator.pipeline.context import (
    EXPECTED_OUTPUT_COUNT,
    PipelineResult,
    RunContext,
    Stage,
    TranslationRequest,
)
from pdftranslator.pipeline.housekeeping import cleanup_run, sweep_expired
from pdftranslator.storage import (
    DECRYPTED_FOLDER,
    HTML_FOLDER,
    SPLIT_FOLDER,
    TEXT_ORIGINAL_FOLDER,
    TEXT_TRANSLATED_FOLDER,
    WORK_FOLDERS,
    LocalStorage,
    Storage,
)
from pdftranslator.translation.chunking import ChunkedTranslator
from pdftranslator.translation.service import GoogleTranslationService

logger = logging.getLogger(__name__)

# Fragments fed to the language detector when no source language is given.
_DETECTION_SAMPLE_FRAGMENTS = 50


def _new_run_id() -> str:
    return secrets.token_hex(8)


def _positive_int(value: Any, default: int, label: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidArgumentError(f"The {label} must be a positive integer.")
    return value


def _build_translator(settings: TranslatorSettings) -> ChunkedTranslator:
    return ChunkedTranslator(
        GoogleTranslationService(),
        max_chunk_chars=settings.max_chunk_chars,
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
        retry_base_seconds=settings.retry_base_seconds,
        max_concurrency=settings.max_concurrency,
        pause_seconds=settings.pause_seconds,
    )


class PdfTranslationPipeline:
    """Translate a PDF while keeping its layout.

    Each public stage takes a :class:`RunContext` and returns a new one, so a
    caller can drive the stages one by one and retry from any boundary.
    :meth:`run` chains them and always removes the run's work files.
    """

    def __init__(
        self,
        settings: TranslatorSettings | None = None,
        *,
        documents: DocumentTools | None = None,
        converter: MarkupConverter | None = None,
        renderer: Renderer | None = None,
        translator: ChunkedTranslator | None = None,
        storage: Storage | None = None,
        run_id_factory: Callable[[], str] = _new_run_id,
    ) -> None:
        self._settings = settings or TranslatorSettings()
        self._documents = documents or PyMuPDFDocumentTools()
        self._converter = converter or Pdf2HtmlConverter(
            binary=self._settings.converter_binary,
            timeout_seconds=self._settings.tool_timeout_seconds,
        )
        self._renderer = renderer or WkhtmltopdfRenderer(
            binary=self._settings.renderer_binary,
            use_xvfb=self._settings.use_xvfb,
            timeout_seconds=self._settings.tool_timeout_seconds,
        )
        self._translator = translator or _build_translator(self._settings)
        self._storage = storage or LocalStorage(self._settings.work_dir)
        self._run_id_factory = run_id_factory

    @property
    def settings(self) -> TranslatorSettings:
        return self._settings

    @property
    def storage(self) -> Storage:
        return self._storage

    async def run(self, request: TranslationRequest, *, cancel: threading.Event | None = None) -> PipelineResult:
        ctx = self.validate(request)
        try:
            ctx = self.check_file(ctx)
            self._checkpoint(ctx, cancel)
            for step in (
                self.check_conditions,
                self.split,
                self.convert,
                self.pause,
                self.extract,
                self.translate,
                self.assemble,
            ):
                ctx = await step(ctx)
                self._checkpoint(ctx, cancel)
            return await self.write_output(ctx)
        except PdfTranslatorError as exc:
            logger.error("Run %s stopped after stage '%s': %s", ctx.run_id, ctx.stage.value, exc)
            raise
        finally:
            try:
                self.cleanup(ctx)
            except OSError:
                logger.exception("Cleanup failed for run %s", ctx.run_id)

    def validate(self, request: TranslationRequest) -> RunContext:
        source_path = Path(request.source_path)
        output_path = Path(request.output_path)

        if source_path.suffix.lower() != ".pdf":
            raise InvalidArgumentError("Invalid PDF file. Please provide a valid PDF file path.")
        if output_path.suffix.lower() != ".pdf":
            raise InvalidArgumentError(
                "The path provided for the translated PDF file must have a valid path with the .pdf extension."
            )
        if output_path.resolve() == source_path.resolve():
            raise InvalidArgumentError("The translated PDF file cannot overwrite the source PDF file.")

        source_lang, target_lang = validate_language_pair(request.source_lang, request.target_lang)
        max_pages = _positive_int(request.max_pages, self._settings.max_pages, "maximum number of pages")
        pages_per_segment = _positive_int(
            request.pages_per_segment,
            self._settings.pages_per_segment,
            "number of pages per segment",
        )

        pause_seconds = request.pause_seconds
        if pause_seconds is not None:
            if isinstance(pause_seconds, bool) or not isinstance(pause_seconds, (int, float)) or pause_seconds < 0:
                raise InvalidArgumentError("The pause before translation must be a non-negative number of seconds.")
            pause_seconds = float(pause_seconds)

        ctx = RunContext(
            run_id=self._run_id_factory(),
            source_path=source_path,
            output_path=output_path,
            source_lang=source_lang,
            target_lang=target_lang,
            max_pages=max_pages,
            pages_per_segment=pages_per_segment,
            pause_seconds=pause_seconds,
        )
        logger.info(
            "Run %s: %s from %s to %s",
            ctx.run_id,
            source_path.name,
            language_name(source_lang) if source_lang else "auto-detected language",
            language_name(target_lang),
        )
        return ctx

    def check_file(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.VALIDATED)
        if not self._storage.exists(ctx.source_path):
            raise SourceNotFoundError(path=ctx.source_path)
        return ctx.advance(Stage.FILE_CHECKED)

    async def check_conditions(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.FILE_CHECKED)

        decrypted_path = self._storage.path_for(DECRYPTED_FOLDER, f"{ctx.run_id}_decrypted.pdf")
        await self._call_tool("decrypt", self._documents.decrypt, ctx.source_path, decrypted_path)
        page_count = await self._call_tool("count_pages", self._documents.count_pages, decrypted_path)

        if page_count > ctx.max_pages:
            raise PageCountExceededError(page_count=page_count, limit=ctx.max_pages)

        logger.info("Run %s: %d page(s), limit %d", ctx.run_id, page_count, ctx.max_pages)
        return ctx.advance(Stage.CONDITIONS_CHECKED, decrypted_path=decrypted_path, page_count=page_count)

    async def split(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.CONDITIONS_CHECKED)
        segments = await self._call_tool(
            "split",
            lambda: split_document(
                self._documents,
                ctx.decrypted_path,
                ctx.pages_per_segment,
                dest_dir=self._storage.folder_path(SPLIT_FOLDER),
                run_id=ctx.run_id,
            ),
        )
        return ctx.advance(Stage.SPLIT, segments=tuple(segments))

    async def convert(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.SPLIT)

        async def _convert(_: int, segment: Segment) -> Path:
            html_path = self._storage.path_for(HTML_FOLDER, f"{segment.name}.html")
            return await self._converter.convert(segment.path, html_path)

        markup_paths = await gather_ordered(ctx.segments, _convert, limit=self._settings.max_concurrency)

        for segment in ctx.segments:
            if segment.is_split_artifact:
                self._storage.delete(segment.path)

        logger.info("Run %s: converted %d segment(s) to HTML", ctx.run_id, len(markup_paths))
        return ctx.advance(Stage.CONVERTED, markup_paths=tuple(markup_paths))

    async def pause(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.CONVERTED)
        await self._translator.pause(ctx.pause_seconds)
        return ctx.advance(Stage.PAUSED)

    async def extract(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.PAUSED)

        originals: list[tuple[str, ...]] = []
        for segment, markup_path in zip(ctx.segments, ctx.markup_paths):
            fragments = extract_fragments(parse_markup(self._storage.read_text(markup_path)))
            text_path = self._storage.path_for(TEXT_ORIGINAL_FOLDER, f"{segment.name}.txt")
            self._storage.write_text(text_path, fragments_to_text(fragments))
            originals.append(tuple(fragments))

        detected = None
        if not ctx.source_lang:
            detected = await self._detect_language(ctx, originals)

        total = sum(len(fragments) for fragments in originals)
        logger.info("Run %s: extracted %d text fragment(s)", ctx.run_id, total)
        return ctx.advance(Stage.EXTRACTED, original_fragments=tuple(originals), detected_language=detected)

    async def translate(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.EXTRACTED)

        translated: list[tuple[str, ...]] = []
        for segment, fragments in zip(ctx.segments, ctx.original_fragments):
            result = await self._translator.translate_fragments(fragments, ctx.source_lang, ctx.target_lang)
            # Only fully translated segments leave a text artifact behind.
            text_path = self._storage.path_for(TEXT_TRANSLATED_FOLDER, f"{segment.name}.txt")
            self._storage.write_text(text_path, fragments_to_text(result))
            translated.append(tuple(result))
            logger.info(
                "Run %s: segment %d/%d translated (pages %s)",
                ctx.run_id,
                segment.index + 1,
                len(ctx.segments),
                segment.pages,
            )

        return ctx.advance(Stage.TRANSLATED, translated_fragments=tuple(translated))

    async def assemble(self, ctx: RunContext) -> RunContext:
        ctx.require(Stage.TRANSLATED)

        if len(ctx.segments) == 1 and not ctx.segments[0].is_split_artifact:
            markup_path = ctx.markup_paths[0]
        else:
            markup_path = await self._converter.convert(
                ctx.decrypted_path,
                self._storage.path_for(HTML_FOLDER, f"{ctx.run_id}_document.html"),
            )

        tree = parse_markup(self._storage.read_text(markup_path))
        report = reinject_with_report(tree, ctx.original_fragments, ctx.translated_fragments)
        html_path = self._storage.write_text(ctx.html_output_path, str(tree))

        logger.info(
            "Run %s: reinjected %d of %d text nodes into %s",
            ctx.run_id,
            report.replaced,
            report.text_nodes,
            html_path,
        )
        return ctx.advance(Stage.ASSEMBLED, output_paths=(html_path,))

    async def write_output(self, ctx: RunContext) -> PipelineResult:
        ctx.require(Stage.ASSEMBLED)

        rendered = await self._renderer.render(ctx.html_output_path, ctx.output_path)
        produced = tuple(
            path
            for path in (ctx.html_output_path, rendered)
            if path is not None and self._storage.exists(path)
        )
        ctx = ctx.advance(Stage.OUTPUT_WRITTEN, output_paths=produced)

        success = len(produced) == EXPECTED_OUTPUT_COUNT
        if success:
            logger.info("Run %s: wrote %s", ctx.run_id, ", ".join(str(path) for path in produced))
        else:
            logger.warning("Run %s: expected %d output files, got %d", ctx.run_id, EXPECTED_OUTPUT_COUNT, len(produced))

        return PipelineResult(
            success=success,
            output_paths=produced,
            run_id=ctx.run_id,
            page_count=ctx.page_count,
            segment_count=len(ctx.segments),
            detected_language=ctx.detected_language,
        )

    def cleanup(self, ctx: RunContext) -> RunContext:
        cleanup_run(self._storage, WORK_FOLDERS, ctx.run_id)
        return ctx.advance(Stage.CLEANED)

    def sweep_expired(self) -> int:
        """Delete work files older than the configured expiration."""
        return sweep_expired(self._storage, WORK_FOLDERS, self._settings.expiration_seconds)

    async def _detect_language(self, ctx: RunContext, originals: list[tuple[str, ...]]) -> str | None:
        sample = " ".join(
            fragment for fragments in originals for fragment in fragments[:_DETECTION_SAMPLE_FRAGMENTS]
        )
        if not sample:
            return None
        try:
            detected = await self._translator.detect_language(sample)
        except TranslationTransportError as exc:
            logger.warning("Run %s: source language detection failed: %s", ctx.run_id, exc)
            return None
        if detected:
            logger.info("Run %s: detected source language %s", ctx.run_id, detected)
        return detected

    async def _call_tool(self, tool: str, func: Callable[..., Any], *args: Any) -> Any:
        timeout = self._settings.tool_timeout_seconds
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise ExternalToolError(tool=tool, message=f"Timed out after {int(timeout)}s") from exc

    @staticmethod
    def _checkpoint(ctx: RunContext, cancel: threading.Event | None) -> None:
        if cancel is not None and cancel.is_set():
            raise PipelineCancelledError(stage=ctx.stage.value)


def translate_pdf(
    request: TranslationRequest,
    settings: TranslatorSettings | None = None,
    *,
    cancel: threading.Event | None = None,
) -> PipelineResult:
    """Blocking convenience wrapper around :meth:`PdfTranslationPipeline.run`."""
    return asyncio.run(PdfTranslationPipeline(settings).run(request, cancel=cancel))
