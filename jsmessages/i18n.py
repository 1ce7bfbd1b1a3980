"""Locale message source: reads from ``static/locales/<lang>.json``.

The same bundles are rendered into JavaScript for the browser and read on the
Python side for server-rendered pages.

Fallback chain:  overrides → lang → default language → fallback.
The language list and bundles are cached until ``reload()``.

Usage::

    from jsmessages.i18n import MessageSource

    source = MessageSource()                         # English default
    source = MessageSource(fallback='fr')            # lang, then English, then French
    source = MessageSource(overrides={'hello': 'Hi {0}'})

    source.bundle('de')                              # {'hello': 'Hallo {0}', ...}
    source('hello', 'Anand', lang='de')              # "Hallo Anand"
    source.preferred('de-CH,de;q=0.9,en;q=0.5')      # "de"
"""

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any

from jsmessages.config import settings
from jsmessages.generator import substitute

logger = logging.getLogger('jsmessages.i18n')

_LANG_CODE = re.compile(r'^[A-Za-z]{2,8}(-[A-Za-z0-9]{1,8})*$')


def _flatten(data: dict[str, Any], prefix: str = '') -> dict[str, str]:
    """Flatten nested objects into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f'{prefix}.{key}' if prefix else key
        if isinstance(value, dict):
            items.update(_flatten(value, full_key))
        else:
            items[full_key] = str(value)
    return items


def _load_json(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logger.error('Could not read locale file %s: %s', path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error('Locale file %s does not contain a JSON object', path)
        return {}
    return _flatten(data)


def _parse_accept_language(header: str) -> list[str]:
    """Return the language tags of an Accept-Language header, best first."""
    weighted: list[tuple[float, int, str]] = []
    for position, part in enumerate(header.split(',')):
        pieces = part.strip().split(';')
        tag = pieces[0].strip().lower()
        if not tag or tag == '*':
            continue
        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition('=')
            if name.strip() == 'q':
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, position, tag))
    return [tag for _, _, tag in sorted(weighted)]


class MessageSource:
    """Per-language key→template bundles with layered fallbacks."""

    def __init__(
        self,
        locales_dir: Path | str | None = None,
        default_lang: str | None = None,
        fallback: str | None = None,
        overrides: dict[str, str] | None = None,
    ) -> None:
        self._overrides = dict(overrides or {})
        self._cache: dict[str, dict[str, str]] = {}
        self._languages: list[str] | None = None
        self._lock = threading.Lock()
        self.configure(locales_dir, default_lang, fallback)

    def configure(
        self,
        locales_dir: Path | str | None = None,
        default_lang: str | None = None,
        fallback: str | None = None,
    ) -> None:
        """(Re)read location and languages; unset arguments come from settings."""
        self.locales_dir = Path(locales_dir) if locales_dir else settings.locales_dir
        self.default_lang = default_lang or settings.default_lang
        # Without an explicit fallback the default language is its own fallback
        self.fallback = fallback or settings.fallback_lang or self.default_lang
        self.reload()

    def languages(self) -> list[str]:
        with self._lock:
            if self._languages is None:
                found = {
                    path.stem for path in self.locales_dir.glob('*.json')
                    if _LANG_CODE.match(path.stem)
                }
                found.add(self.default_lang)
                self._languages = sorted(found)
            return list(self._languages)

    def has_language(self, lang: str) -> bool:
        return lang in self.languages()

    def bundle(self, lang: str | None = None) -> dict[str, str]:
        """Return a copy of the resolved bundle for *lang*."""
        lang = lang or self.default_lang
        if not _LANG_CODE.match(lang) or not self.has_language(lang):
            lang = self.default_lang
        with self._lock:
            if lang not in self._cache:
                self._cache[lang] = self._build(lang)
            return dict(self._cache[lang])

    def _build(self, lang: str) -> dict[str, str]:
        # Fallback language only fills keys the others lack
        strings: dict[str, str] = {}
        if self.fallback not in (self.default_lang, lang):
            strings.update(_load_json(self.locales_dir / f'{self.fallback}.json'))

        strings.update(_load_json(self.locales_dir / f'{self.default_lang}.json'))

        if lang != self.default_lang:
            strings.update(_load_json(self.locales_dir / f'{lang}.json'))

        # Host-specific overrides win
        strings.update(self._overrides)
        return strings

    def bundles(self) -> dict[str, dict[str, str]]:
        return {lang: self.bundle(lang) for lang in self.languages()}

    def preferred(self, accept_language: str | None) -> str:
        """Negotiate the best available language for an Accept-Language header."""
        available = {lang.lower(): lang for lang in self.languages()}
        for tag in _parse_accept_language(accept_language or ''):
            # Match full tag or primary subtag (e.g. "de-CH" → "de")
            if tag in available:
                return available[tag]
            primary = tag.split('-')[0]
            if primary in available:
                return available[primary]
        return self.default_lang

    def reload(self) -> None:
        with self._lock:
            self._cache.clear()
            self._languages = None

    def __call__(self, key: str, *args: Any, lang: str | None = None) -> str:
        template = self.bundle(lang).get(key, key)
        return substitute(template, args) if args else template


# Module singleton
source = MessageSource()
