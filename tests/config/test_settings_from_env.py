from __future__ import annotations

from pathlib import Path

import pytest

from pdftranslator.config import (
    DEFAULT_MAX_CHUNK_CHARS,
    DEFAULT_MAX_PAGES,
    DEFAULT_PAGES_PER_SEGMENT,
    TranslatorSettings,
)


def test_defaults_when_environment_is_empty() -> None:
    settings = TranslatorSettings.from_env({})

    assert settings == TranslatorSettings()
    assert settings.max_pages == DEFAULT_MAX_PAGES == 100
    assert settings.pages_per_segment == DEFAULT_PAGES_PER_SEGMENT == 20
    assert settings.max_chunk_chars == DEFAULT_MAX_CHUNK_CHARS == 3700
    assert settings.pause_seconds == 1.0
    assert settings.expiration_seconds == 3600
    assert settings.use_xvfb is True


def test_overrides_are_parsed() -> None:
    settings = TranslatorSettings.from_env(
        {
            "PDFTRANSLATOR_WORK_DIR": "/tmp/work",
            "PDFTRANSLATOR_MAX_PAGES": "40",
            "PDFTRANSLATOR_PAGES_PER_SEGMENT": "5",
            "PDFTRANSLATOR_PAUSE_SECONDS": "0",
            "PDFTRANSLATOR_MAX_RETRIES": "0",
            "PDFTRANSLATOR_MAX_CONCURRENCY": "4",
            "PDFTRANSLATOR_CONVERTER": "/opt/bin/pdf2htmlEX",
            "PDFTRANSLATOR_USE_XVFB": "no",
        }
    )

    assert settings.work_dir == Path("/tmp/work")
    assert settings.max_pages == 40
    assert settings.pages_per_segment == 5
    assert settings.pause_seconds == 0.0
    assert settings.max_retries == 0
    assert settings.max_concurrency == 4
    assert settings.converter_binary == "/opt/bin/pdf2htmlEX"
    assert settings.use_xvfb is False


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("PDFTRANSLATOR_MAX_PAGES", "many", "must be an integer"),
        ("PDFTRANSLATOR_MAX_PAGES", "0", "must be >= 1"),
        ("PDFTRANSLATOR_MAX_CHUNK_CHARS", "50", "must be >= 100"),
        ("PDFTRANSLATOR_PAUSE_SECONDS", "-1", "must be >= 0"),
        ("PDFTRANSLATOR_USE_XVFB", "maybe", "must be a boolean flag"),
        ("PDFTRANSLATOR_RENDERER", "  ", "cannot be empty"),
    ],
)
def test_invalid_values_name_the_variable(name: str, value: str, message: str) -> None:
    with pytest.raises(ValueError) as exc_info:
        TranslatorSettings.from_env({name: value})

    assert name in str(exc_info.value)
    assert message in str(exc_info.value)
