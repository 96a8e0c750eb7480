"""Supported translation languages and language-code validation."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pdftranslator.errors import InvalidArgumentError, UnsupportedLanguageError

SOURCE_ROLE = "source"
TARGET_ROLE = "target"

# Google Translate codes accepted for source and target languages.
SUPPORTED_LANGUAGES: Mapping[str, str] = MappingProxyType(
    {
        "af": "Afrikaans",
        "sq": "Albanian",
        "am": "Amharic",
        "ar": "Arabic",
        "hy": "Armenian",
        "as": "Assamese",
        "ay": "Aymara",
        "az": "Azerbaijani",
        "bm": "Bambara",
        "eu": "Basque",
        "be": "Belarusian",
        "bn": "Bengali",
        "bho": "Bhojpuri",
        "bs": "Bosnian",
        "bg": "Bulgarian",
        "ca": "Catalan",
        "ceb": "Cebuano",
        "zh-CN": "Chinese (Simplified)",
        "zh-TW": "Chinese (Traditional)",
        "co": "Corsican",
        "hr": "Croatian",
        "cs": "Czech",
        "da": "Danish",
        "dv": "Dhivehi",
        "doi": "Dogri",
        "nl": "Dutch",
        "en": "English",
        "eo": "Esperanto",
        "et": "Estonian",
        "ee": "Ewe",
        "fil": "Filipino (Tagalog)",
        "fi": "Finnish",
        "fr": "French",
        "fy": "Frisian",
        "gl": "Galician",
        "ka": "Georgian",
        "de": "German",
        "el": "Greek",
        "gn": "Guarani",
        "gu": "Gujarati",
        "ht": "Haitian Creole",
        "ha": "Hausa",
        "haw": "Hawaiian",
        "he": "Hebrew",
        "iw": "Hebrew",
        "hi": "Hindi",
        "hmn": "Hmong",
        "hu": "Hungarian",
        "is": "Icelandic",
        "ig": "Igbo",
        "ilo": "Ilocano",
        "id": "Indonesian",
        "ga": "Irish",
        "it": "Italian",
        "ja": "Japanese",
        "jv": "Javanese",
        "kn": "Kannada",
        "kk": "Kazakh",
        "km": "Khmer",
        "rw": "Kinyarwanda",
        "gom": "Konkani",
        "ko": "Korean",
        "kri": "Krio",
        "ku": "Kurdish",
        "ckb": "Kurdish (Sorani)",
        "ky": "Kyrgyz",
        "lo": "Lao",
        "la": "Latin",
        "lv": "Latvian",
        "ln": "Lingala",
        "lt": "Lithuanian",
        "lg": "Luganda",
        "lb": "Luxembourgish",
        "mk": "Macedonian",
        "mai": "Maithili",
        "mg": "Malagasy",
        "ms": "Malay",
        "ml": "Malayalam",
        "mt": "Maltese",
        "mi": "Maori",
        "mr": "Marathi",
        "mni-Mtei": "Meiteilon (Manipuri)",
        "lus": "Mizo",
        "mn": "Mongolian",
        "my": "Myanmar (Burmese)",
        "ne": "Nepali",
        "no": "Norwegian",
        "ny": "Nyanja (Chichewa)",
        "or": "Odia (Oriya)",
        "om": "Oromo",
        "ps": "Pashto",
        "fa": "Persian",
        "pl": "Polish",
        "pt": "Portuguese (Portugal, Brazil)",
        "pa": "Punjabi",
        "qu": "Quechua",
        "ro": "Romanian",
        "ru": "Russian",
        "sm": "Samoan",
        "sa": "Sanskrit",
        "gd": "Scots Gaelic",
        "nso": "Sepedi",
        "sr": "Serbian",
        "st": "Sesotho",
        "sn": "Shona",
        "sd": "Sindhi",
        "si": "Sinhala (Sinhalese)",
        "sk": "Slovak",
        "sl": "Slovenian",
        "so": "Somali",
        "es": "Spanish",
        "su": "Sundanese",
        "sw": "Swahili",
        "sv": "Swedish",
        "tl": "Tagalog (Filipino)",
        "tg": "Tajik",
        "ta": "Tamil",
        "tt": "Tatar",
        "te": "Telugu",
        "th": "Thai",
        "ti": "Tigrinya",
        "ts": "Tsonga",
        "tr": "Turkish",
        "tk": "Turkmen",
        "ak": "Twi (Akan)",
        "uk": "Ukrainian",
        "ur": "Urdu",
        "ug": "Uyghur",
        "uz": "Uzbek",
        "vi": "Vietnamese",
        "cy": "Welsh",
        "xh": "Xhosa",
        "yi": "Yiddish",
        "yo": "Yoruba",
        "zu": "Zulu",
    }
)

_CODE_INDEX: dict[str, str] = {code.lower(): code for code in SUPPORTED_LANGUAGES}

_NAME_INDEX: dict[str, str] = {}
for _code, _name in SUPPORTED_LANGUAGES.items():
    # Hebrew is listed under both "he" and "iw"; the first code wins.
    _NAME_INDEX.setdefault(_name.lower(), _code)
del _code, _name


def language_name(code: str) -> str:
    """Return the display name for *code*, or *code* itself when unknown."""

    canonical = canonical_code(code)
    if canonical is None:
        return code
    return SUPPORTED_LANGUAGES[canonical]


def suggest_code(value: str) -> str | None:
    """Return the code whose display name equals *value*, ignoring case."""

    return _NAME_INDEX.get(value.strip().lower())


def validate_language(code: str | None, *, role: str = TARGET_ROLE) -> str:
    """Validate a language code and return its canonical spelling.

    An empty source language is legal and means "let the service detect it";
    the empty string is returned in that case. When *code* is not a known code
    but matches a display name (``"french"``), the raised
    :class:`UnsupportedLanguageError` names the code to use instead.
    """

    if role not in (SOURCE_ROLE, TARGET_ROLE):
        raise InvalidArgumentError(f"Unknown language role: {role!r}")
    if code is not None and not isinstance(code, str):
        raise InvalidArgumentError(f'The language "{role}" must be a string.')

    lowered = (code or "").strip().lower()
    if not lowered:
        if role == SOURCE_ROLE:
            return ""
        raise InvalidArgumentError("A target language is required.")

    canonical = _CODE_INDEX.get(lowered)
    if canonical is not None:
        return canonical

    suggestion = _NAME_INDEX.get(lowered)
    if role == SOURCE_ROLE:
        if suggestion:
            message = (
                f"The code '{lowered}' provided for the language of your PDF document is invalid. "
                f"Please use the language code '{suggestion}'."
            )
        else:
            message = f"The '{lowered}' language code you provided for your PDF document is invalid."
    elif suggestion:
        message = (
            f"The language code '{lowered}' you provided for the PDF translation is invalid. "
            f"Please use this language code '{suggestion}'."
        )
    else:
        message = f"The language code '{lowered}' provided for the translation of the PDF document is invalid."

    raise UnsupportedLanguageError(code=lowered, role=role, message=message, suggestion=suggestion)


def validate_language_pair(source: str | None, target: str | None) -> tuple[str, str]:
    """Validate source then target; returns ``(source, target)`` canonical codes."""

    return (
        validate_language(source, role=SOURCE_ROLE),
        validate_language(target, role=TARGET_ROLE),
    )


def canonical_code(code: str) -> str | None:
    """Return the table spelling of *code* (``"zh-cn"`` -> ``"zh-CN"``), or None."""

    return _CODE_INDEX.get(code.strip().lower())
