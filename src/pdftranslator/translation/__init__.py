"""Remote translation client and chunked translation policy."""

from .chunking import ChunkedTranslator, split_into_chunks
from .service import GoogleTranslationService, TranslationService

__all__ = [
    "ChunkedTranslator",
    "GoogleTranslationService",
    "TranslationService",
    "split_into_chunks",
]
