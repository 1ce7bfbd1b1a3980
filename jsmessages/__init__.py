from jsmessages.generator import (
    GenerationOptions,
    InvalidNamespace,
    Mode,
    render,
    render_all_object,
    render_function,
    render_languages_function,
)
from jsmessages.i18n import MessageSource
from jsmessages.messages import JsMessages

__all__ = [
    "GenerationOptions",
    "InvalidNamespace",
    "JsMessages",
    "MessageSource",
    "Mode",
    "render",
    "render_all_object",
    "render_function",
    "render_languages_function",
]
