"""Source-language detection used as a diagnostic when no source is given."""

from __future__ import annotations

from functools import lru_cache

from pdftranslator.languages import canonical_code

# lingua ISO 639-1 names that differ from the translation service's codes.
_LINGUA_TO_SERVICE: dict[str, str] = {
    "zh": "zh-CN",
    "nb": "no",
    "nn": "no",
}


@lru_cache(maxsize=1)
def _get_detector():
    from lingua import LanguageDetectorBuilder

    return (
        LanguageDetectorBuilder.from_all_languages()
        .with_minimum_relative_distance(0.1)
        .build()
    )


def detect_language(text: str, *, sample_chars: int = 3000) -> str | None:
    """Return the service language code for *text*, or None when inconclusive.

    Only the first *sample_chars* characters are inspected.
    """
    if not text:
        return None

    sample = text[:sample_chars].strip()
    if not sample:
        return None

    detector = _get_detector()
    result = detector.detect_language_of(sample)
    if result is None:
        return None

    iso = result.iso_code_639_1.name.lower()
    iso = _LINGUA_TO_SERVICE.get(iso, iso)
    return canonical_code(iso) or iso
