"""Write translated fragments back into their original text nodes."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

from bs4 import BeautifulSoup
from bs4.element import NavigableString, Tag

from pdftranslator.markup.extractor import iter_text_nodes

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReinjectionReport:
    text_nodes: int
    replaced: int

    @property
    def untouched(self) -> int:
        return self.text_nodes - self.replaced


def _first_positions(fragments: Sequence[str]) -> dict[str, int]:
    positions: dict[str, int] = {}
    for index, fragment in enumerate(fragments):
        positions.setdefault(fragment, index)
    return positions


def reinject_with_report(
    tree: BeautifulSoup | Tag,
    original_by_segment: Sequence[Sequence[str]],
    translated_by_segment: Sequence[Sequence[str]],
) -> ReinjectionReport:
    """Replace matching text nodes of *tree* in place and count the hits.

    Each visible node's trimmed value is looked up by value in the original
    fragments of segment 0, 1, ... and the first hit whose index also exists in
    that segment's translated fragments wins. Unmatched nodes are left as they
    are. Only string values change; whitespace around the node text is kept.
    """

    lookups = [_first_positions(fragments) for fragments in original_by_segment]
    nodes = list(iter_text_nodes(tree))
    replaced = 0

    for node in nodes:
        value = str(node)
        probe = value.strip()
        if not probe:
            continue

        for segment_index, positions in enumerate(lookups):
            position = positions.get(probe)
            if position is None:
                continue
            translated = translated_by_segment[segment_index] if segment_index < len(translated_by_segment) else ()
            if position >= len(translated):
                continue

            leading = value[: len(value) - len(value.lstrip())]
            trailing = value[len(value.rstrip()) :]
            node.replace_with(NavigableString(f"{leading}{translated[position]}{trailing}"))
            replaced += 1
            break

    logger.debug("Reinjected %d of %d text nodes", replaced, len(nodes))
    return ReinjectionReport(text_nodes=len(nodes), replaced=replaced)


def reinject(
    tree: BeautifulSoup | Tag,
    original_by_segment: Sequence[Sequence[str]],
    translated_by_segment: Sequence[Sequence[str]],
) -> BeautifulSoup | Tag:
    """Mutate *tree* in place (see :func:`reinject_with_report`) and return it."""

    reinject_with_report(tree, original_by_segment, translated_by_segment)
    return tree
