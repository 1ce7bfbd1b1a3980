from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from jsmessages.config import settings
from jsmessages.handlers import (
    handle_all_messages_script,
    handle_bundle,
    handle_function_script,
    handle_index,
    handle_languages,
    handle_languages_script,
)
from jsmessages.i18n import source
from jsmessages.schemas import LanguagesResponse
from jsmessages.util import JavaScriptResponse

router = APIRouter()


def _language(request: Request, lang: str | None) -> str:
    """Explicit ``?lang=`` wins when supported, then the negotiated language."""
    if lang and source.has_language(lang):
        return lang
    negotiated = getattr(request.state, "language", None)
    return negotiated or source.preferred(request.headers.get("Accept-Language"))


def _namespace(namespace: str | None) -> str | None:
    # An empty ?namespace= asks for the bare expression.
    if namespace is None:
        return settings.namespace
    return namespace or None


@router.get("/messages.js", response_class=JavaScriptResponse)
async def messages_script(
    request: Request,
    namespace: str | None = None,
    lang: str | None = None,
    keys: list[str] | None = Query(default=None),
    prefix: str | None = None,
) -> JavaScriptResponse:
    language = _language(request, lang)
    script = handle_function_script(source, language, _namespace(namespace), keys, prefix)
    return JavaScriptResponse(script, headers={"Content-Language": language})


@router.get("/messages/all.js", response_class=JavaScriptResponse)
async def all_messages_script(
    request: Request,
    namespace: str | None = None,
    lang: str | None = None,
    keys: list[str] | None = Query(default=None),
    prefix: str | None = None,
) -> JavaScriptResponse:
    language = _language(request, lang)
    script = handle_all_messages_script(source, language, _namespace(namespace), keys, prefix)
    return JavaScriptResponse(script, headers={"Content-Language": language})


@router.get("/messages/languages.js", response_class=JavaScriptResponse)
async def languages_script(
    namespace: str | None = None,
    keys: list[str] | None = Query(default=None),
    prefix: str | None = None,
) -> JavaScriptResponse:
    return JavaScriptResponse(handle_languages_script(source, _namespace(namespace), keys, prefix))


@router.get("/api/i18n/languages", response_model=LanguagesResponse)
async def get_languages() -> LanguagesResponse:
    return LanguagesResponse(**handle_languages(source))


@router.get("/api/i18n/{lang}")
async def get_bundle(lang: str) -> dict[str, str]:
    return handle_bundle(source, lang)


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, lang: str | None = None) -> HTMLResponse:
    language = _language(request, lang)
    return HTMLResponse(
        handle_index(source, language, settings.namespace),
        headers={"Content-Language": language},
    )
