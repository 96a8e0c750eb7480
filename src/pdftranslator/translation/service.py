"""Remote translation service contract and the Google Translate client."""

from __future__ import annotations

import threading
from typing import Any, Callable, Protocol, runtime_checkable

from deep_translator import GoogleTranslator

from pdftranslator.translation.language_detection import detect_language


AUTO_DETECT = "auto"

# Table codes the Google endpoint only accepts under their legacy spelling.
_SERVICE_CODES: dict[str, str] = {
    "he": "iw",
    "jv": "jw",
    "fil": "tl",
}


def service_code(code: str) -> str:
    """Return the code ``GoogleTranslator`` expects for a validated table code."""
    return _SERVICE_CODES.get(code, code)


@runtime_checkable
class TranslationService(Protocol):
    """Blocking translation backend; callers apply timeouts and retries."""

    def translate(self, text: str, source: str, target: str) -> str:
        """Translate *text*; an empty *source* means auto-detect."""

    def detect_language(self, text: str) -> str | None:
        """Best-guess language code for *text*."""


def _build_default_translator(source: str, target: str, proxies: dict[str, str] | None) -> Any:
    return GoogleTranslator(source=source, target=target, proxies=proxies)


class GoogleTranslationService:
    """deep-translator ``GoogleTranslator`` wrapper.

    ``GoogleTranslator`` stores the request payload on the instance, so each
    worker thread keeps its own client per language pair.
    """

    def __init__(
        self,
        *,
        proxies: dict[str, str] | None = None,
        translator_factory: Callable[[str, str, dict[str, str] | None], Any] = _build_default_translator,
    ) -> None:
        self._proxies = proxies
        self._factory = translator_factory
        self._local = threading.local()

    def _client(self, source: str, target: str) -> Any:
        key = (service_code(source) if source else AUTO_DETECT, service_code(target))
        clients: dict[tuple[str, str], Any] | None = getattr(self._local, "clients", None)
        if clients is None:
            clients = self._local.clients = {}
        client = clients.get(key)
        if client is None:
            client = clients[key] = self._factory(key[0], key[1], self._proxies)
        return client

    def translate(self, text: str, source: str, target: str) -> str:
        if not text.strip():
            return text
        translated = self._client(source, target).translate(text)
        if not isinstance(translated, str):
            return text
        # The client trims its input and output; the line breaks around a chunk
        # separate fragments and must survive.
        leading = text[: len(text) - len(text.lstrip())]
        trailing = text[len(text.rstrip()) :]
        return f"{leading}{translated.strip()}{trailing}"

    def detect_language(self, text: str) -> str | None:
        return detect_language(text)
