"""Core handler functions, no FastAPI request types. Used by the routes and by hosts embedding jsmessages."""

from html import escape

from fastapi import HTTPException

from jsmessages.i18n import MessageSource
from jsmessages.messages import JsMessages
from jsmessages.util import parse_keys, prefix_filter


def _select(source: MessageSource, keys: list[str] | None, prefix: str | None) -> JsMessages:
    keys = parse_keys(keys)
    if keys is not None and prefix is not None:
        raise HTTPException(status_code=400, detail="Use either keys or prefix, not both.")
    if keys is not None:
        return JsMessages.subset(source, *keys)
    if prefix is not None:
        return JsMessages.filtering(source, prefix_filter(prefix))
    return JsMessages.all(source)


def handle_function_script(
    source: MessageSource,
    lang: str,
    namespace: str | None,
    keys: list[str] | None = None,
    prefix: str | None = None,
) -> str:
    return _select(source, keys, prefix)(lang, namespace)


def handle_all_messages_script(
    source: MessageSource,
    lang: str,
    namespace: str | None,
    keys: list[str] | None = None,
    prefix: str | None = None,
) -> str:
    return _select(source, keys, prefix).all_messages(lang, namespace)


def handle_languages_script(
    source: MessageSource,
    namespace: str | None,
    keys: list[str] | None = None,
    prefix: str | None = None,
) -> str:
    return _select(source, keys, prefix).languages(namespace)


def handle_languages(source: MessageSource) -> dict:
    return {"languages": source.languages(), "default": source.default_lang}


def handle_bundle(source: MessageSource, lang: str) -> dict[str, str]:
    if not source.has_language(lang):
        raise HTTPException(status_code=404, detail=f"Language '{lang}' not supported")
    return source.bundle(lang)


def handle_index(source: MessageSource, lang: str, namespace: str) -> str:
    """Sample page: current language inline, every language from /messages/languages.js."""
    title = escape(source("index.title", lang=lang))
    placeholder = escape(source("index.name", lang=lang), quote=True)
    messages = JsMessages.all(source).html(lang, namespace)
    return (
        "<!DOCTYPE html>\n"
        f'<html lang="{escape(lang, quote=True)}">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{title}</title>\n"
        f"{messages}\n"
        '<script src="/messages/languages.js?namespace=window.AllMessages"></script>\n'
        "</head>\n"
        "<body>\n"
        f"<h1>{title}</h1>\n"
        f'<input id="name" placeholder="{placeholder}">\n'
        '<div id="currentPanelContent"></div>\n'
        '<div id="englishPanelContent"></div>\n'
        '<div id="frenchPanelContent"></div>\n'
        '<div id="hindiPanelContent"></div>\n'
        '<div id="latinPanelContent"></div>\n'
        '<script src="/static/app.js"></script>\n'
        "</body>\n"
        "</html>\n"
    )
