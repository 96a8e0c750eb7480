"""CLI entrypoint: translate one PDF and emit a JSON status payload."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

from pdftranslator.config import TranslatorSettings
from pdftranslator.errors import InvalidArgumentError, PdfTranslatorError, UnsupportedLanguageError
from pdftranslator.pipeline import PdfTranslationPipeline, TranslationRequest
from pdftranslator.pipeline.context import EXPECTED_OUTPUT_COUNT


LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Translate a PDF while preserving its layout")
    parser.add_argument("--input", required=True, help="Source PDF file")
    parser.add_argument("--target", required=True, help="Target language code, e.g. fr")
    parser.add_argument("--source", default="", help="Source language code; empty means auto-detect")
    parser.add_argument("--output", required=True, help="Translated PDF path; the HTML is written beside it")
    parser.add_argument("--max-pages", type=int, default=None, help="Reject documents with more pages")
    parser.add_argument("--pages-per-segment", type=int, default=None, help="Pages converted per segment")
    parser.add_argument("--pause", type=float, default=None, help="Pause in seconds before translating")
    parser.add_argument("--work-dir", default=None, help="Directory for intermediate files")
    parser.add_argument(
        "--sweep-expired",
        action="store_true",
        help="Delete stale work files from earlier runs before starting",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def _load_settings(args: argparse.Namespace) -> TranslatorSettings:
    settings = TranslatorSettings.from_env()
    if args.work_dir:
        settings = dataclasses.replace(settings, work_dir=Path(args.work_dir))
    return settings


def _emit(payload: dict[str, object]) -> None:
    print(json.dumps(payload, ensure_ascii=True, indent=2))


async def _translate(args: argparse.Namespace, settings: TranslatorSettings) -> int:
    pipeline = PdfTranslationPipeline(settings)
    if args.sweep_expired:
        pipeline.sweep_expired()

    request = TranslationRequest(
        source_path=Path(args.input),
        output_path=Path(args.output),
        target_lang=args.target,
        source_lang=args.source,
        max_pages=args.max_pages,
        pages_per_segment=args.pages_per_segment,
        pause_seconds=args.pause,
    )

    try:
        result = await pipeline.run(request)
    except (InvalidArgumentError, UnsupportedLanguageError) as exc:
        print(str(exc), file=sys.stderr)
        _emit({"success": False, "paths": [], "error": str(exc)})
        return EXIT_USAGE
    except PdfTranslatorError as exc:
        print(str(exc), file=sys.stderr)
        _emit({"success": False, "paths": [], "error": str(exc)})
        return EXIT_FAILED

    _emit(result.to_dict())
    if not result.success:
        print(
            f"Translation incomplete: produced {len(result.output_paths)} of {EXPECTED_OUTPUT_COUNT} output files",
            file=sys.stderr,
        )
        return EXIT_FAILED
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        settings = _load_settings(args)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE

    try:
        return asyncio.run(_translate(args, settings))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
