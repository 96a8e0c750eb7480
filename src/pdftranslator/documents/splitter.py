"""Partition a document into page-range segments of bounded size."""

from __future__ import annotations

import logging
import math
from pathlib import Path

from pdftranslator.documents.base import DocumentTools
from pdftranslator.documents.models import PageRange, Segment
from pdftranslator.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# Wide enough that lexicographic order of part names equals page order.
_PART_WIDTH = 4


def segment_name(run_id: str, part: int) -> str:
    return f"{run_id}_part{part:0{_PART_WIDTH}d}"


def plan_page_ranges(total_pages: int, max_pages_per_segment: int) -> list[PageRange]:
    """Return contiguous, non-overlapping ranges covering ``[1, total_pages]``."""

    if max_pages_per_segment < 1:
        raise InvalidArgumentError("The maximum number of pages per segment must be a positive integer.")
    if total_pages < 1:
        return []
    if total_pages <= max_pages_per_segment:
        return [PageRange(1, total_pages)]

    parts = math.ceil(total_pages / max_pages_per_segment)
    return [
        PageRange(
            1 + (part - 1) * max_pages_per_segment,
            min(part * max_pages_per_segment, total_pages),
        )
        for part in range(1, parts + 1)
    ]


def split_document(
    tools: DocumentTools,
    path: Path,
    max_pages_per_segment: int,
    *,
    dest_dir: Path,
    run_id: str,
) -> list[Segment]:
    """Split *path* into segments; a short document is returned unchanged.

    The page count comes from *tools*; any failure there propagates before a
    single segment file is written.
    """

    total_pages = tools.count_pages(path)
    ranges = plan_page_ranges(total_pages, max_pages_per_segment)
    if not ranges:
        raise InvalidArgumentError(f"The PDF file '{path}' has no pages.")

    if len(ranges) == 1:
        logger.info("Document has %d page(s); no split needed", total_pages)
        return [Segment(index=0, path=path, pages=ranges[0], is_split_artifact=False)]

    segments: list[Segment] = []
    for index, pages in enumerate(ranges):
        destination = dest_dir / f"{segment_name(run_id, index + 1)}.pdf"
        tools.extract_pages(path, pages, destination)
        segments.append(Segment(index=index, path=destination, pages=pages, is_split_artifact=True))

    logger.info("Split %d pages into %d segments of up to %d pages", total_pages, len(segments), max_pages_per_segment)
    return segments
