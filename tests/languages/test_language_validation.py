from __future__ import annotations

import pytest

from pdftranslator.errors import InvalidArgumentError, UnsupportedLanguageError
from pdftranslator.languages import (
    SOURCE_ROLE,
    SUPPORTED_LANGUAGES,
    TARGET_ROLE,
    canonical_code,
    language_name,
    suggest_code,
    validate_language,
    validate_language_pair,
)


def test_every_supported_code_validates_to_itself_in_both_roles() -> None:
    for code in SUPPORTED_LANGUAGES:
        assert validate_language(code, role=SOURCE_ROLE) == code
        assert validate_language(code, role=TARGET_ROLE) == code


def test_codes_are_case_insensitive_and_trimmed() -> None:
    assert validate_language(" FR ") == "fr"
    assert validate_language("zh-cn") == "zh-CN"
    assert canonical_code("ZH-tw") == "zh-TW"
    assert canonical_code("klingon") is None


def test_display_name_yields_code_suggestion_for_target() -> None:
    with pytest.raises(UnsupportedLanguageError) as exc_info:
        validate_language("french", role=TARGET_ROLE)

    error = exc_info.value
    assert error.code == "french"
    assert error.role == TARGET_ROLE
    assert error.suggestion == "fr"
    assert "'fr'" in str(error)


def test_display_name_yields_code_suggestion_for_source() -> None:
    with pytest.raises(UnsupportedLanguageError) as exc_info:
        validate_language("German", role=SOURCE_ROLE)

    assert exc_info.value.suggestion == "de"
    assert "language of your PDF document" in str(exc_info.value)


def test_unknown_value_has_no_suggestion() -> None:
    with pytest.raises(UnsupportedLanguageError) as exc_info:
        validate_language("xx-unknown")

    assert exc_info.value.suggestion is None
    assert "Please use" not in str(exc_info.value)


def test_empty_source_means_auto_detect_but_empty_target_is_rejected() -> None:
    assert validate_language("", role=SOURCE_ROLE) == ""
    assert validate_language(None, role=SOURCE_ROLE) == ""

    with pytest.raises(InvalidArgumentError):
        validate_language("", role=TARGET_ROLE)


def test_non_string_code_is_an_invalid_argument() -> None:
    with pytest.raises(InvalidArgumentError):
        validate_language(42, role=TARGET_ROLE)  # type: ignore[arg-type]


def test_pair_validation_checks_source_first() -> None:
    assert validate_language_pair("EN", "fr") == ("en", "fr")

    with pytest.raises(UnsupportedLanguageError) as exc_info:
        validate_language_pair("english", "nope")
    assert exc_info.value.role == SOURCE_ROLE


def test_hebrew_name_suggests_first_listed_code() -> None:
    assert suggest_code("hebrew") == "he"
    assert validate_language("iw") == "iw"


def test_language_name_falls_back_to_code() -> None:
    assert language_name("fr") == "French"
    assert language_name("zz") == "zz"
