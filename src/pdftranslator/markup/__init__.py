"""HTML text extraction and position-preserving reinjection."""

from .extractor import extract_fragments, fragments_to_text, parse_markup, text_to_fragments
from .reinjector import ReinjectionReport, reinject, reinject_with_report

__all__ = [
    "ReinjectionReport",
    "extract_fragments",
    "fragments_to_text",
    "parse_markup",
    "reinject",
    "reinject_with_report",
    "text_to_fragments",
]
