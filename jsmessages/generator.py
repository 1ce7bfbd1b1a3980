"""Render localized message bundles as JavaScript source.

The generator is a pure function of ``(bundle, options)``: it never looks up
the current request or language, it only turns an already resolved
key→template mapping into JavaScript text.

Usage::

    from jsmessages.generator import render_function

    js = render_function({"greeting": "Hello {0}!"}, namespace="window.Messages")
    # window.Messages = (function(){...})();
    # In the browser: Messages("greeting", "World")  -> "Hello World!"
    #                 Messages("missing")            -> "missing"
"""

import json
import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger("jsmessages.generator")

KeyFilter = Callable[[str], bool]


class Mode(str, Enum):
    FUNCTION = "function"
    ALL_MESSAGES_OBJECT = "allMessagesObject"


class InvalidNamespace(ValueError):
    def __init__(self, namespace: str, reason: str):
        self.namespace = namespace
        self.reason = reason
        super().__init__(f"Invalid namespace {namespace!r}: {reason}")


@dataclass(frozen=True)
class GenerationOptions:
    namespace: str | None = None
    key_subset: Iterable[str] | None = None
    key_filter: KeyFilter | None = None
    mode: Mode = Mode.FUNCTION
    html_safe: bool = True

    def __post_init__(self) -> None:
        if self.key_subset is not None and self.key_filter is not None:
            raise ValueError("key_subset and key_filter are mutually exclusive")
        if isinstance(self.key_subset, str):
            raise TypeError("key_subset must be an iterable of keys, not a str")
        if self.key_subset is not None:
            # Snapshot the caller's iterable.
            object.__setattr__(self, "key_subset", frozenset(self.key_subset))


# --- Namespace ---

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Roots that always exist in a browser and must not be redeclared.
HOST_GLOBALS = frozenset({"window", "self", "globalThis", "this"})

RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield", "let", "static",
    "implements", "interface", "package", "private", "protected", "public",
    "await",
})


def parse_namespace(namespace: str) -> list[str]:
    """Split a dotted namespace into identifier segments, or raise InvalidNamespace."""
    if not namespace:
        raise InvalidNamespace(namespace, "namespace is empty")
    segments = namespace.split(".")
    for index, segment in enumerate(segments):
        if not _IDENTIFIER.match(segment):
            raise InvalidNamespace(namespace, f"{segment!r} is not a JavaScript identifier")
        if segment in RESERVED_WORDS and not (index == 0 and segment == "this"):
            raise InvalidNamespace(namespace, f"{segment!r} is a reserved word")
    if len(segments) == 1 and segments[0] in HOST_GLOBALS:
        raise InvalidNamespace(namespace, "cannot assign to a host global")
    return segments


def wrap_namespace(segments: list[str], expression: str) -> str:
    """Assign *expression* to the dotted path, guarding every missing parent."""
    lines: list[str] = []
    root = segments[0]
    if len(segments) > 1 and root not in HOST_GLOBALS:
        lines.append(f"var {root} = {root} || {{}};")
    for depth in range(2, len(segments)):
        path = ".".join(segments[:depth])
        lines.append(f"{path} = {path} || {{}};")
    lines.append(f"{'.'.join(segments)} = {expression};")
    return "\n".join(lines)


# --- Selection ---

def _accepts(key_filter: KeyFilter, key: str) -> bool:
    try:
        return bool(key_filter(key))
    except Exception as exc:
        logger.warning("Key filter failed for %r, excluding it: %s", key, exc)
        return False


def select_keys(bundle: Mapping[str, str], options: GenerationOptions) -> list[str]:
    if options.key_subset is not None:
        keys = [k for k in bundle if k in options.key_subset]
    elif options.key_filter is not None:
        keys = [k for k in bundle if _accepts(options.key_filter, k)]
    else:
        keys = list(bundle)
    return sorted(keys)


# --- Escaping ---

_SCRIPT_CLOSE = re.compile(r"</(script)", re.IGNORECASE)


def escape_js_string(value: str, html_safe: bool = True) -> str:
    """Return *value* as a double-quoted JavaScript string literal.

    The literal is also valid JSON, so ``json.loads`` reverses it.
    """
    literal = json.dumps(value, ensure_ascii=False)
    # Valid in JSON strings, but line terminators in pre-ES2019 JavaScript.
    literal = literal.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
    if html_safe:
        literal = _SCRIPT_CLOSE.sub(r"<\\/\1", literal)
    return literal


def render_table(bundle: Mapping[str, str], keys: Iterable[str], html_safe: bool = True) -> str:
    entries = [
        f"{escape_js_string(key, html_safe)}:{escape_js_string(str(bundle[key]), html_safe)}"
        for key in keys
    ]
    return "{" + ",".join(entries) + "}"


# --- Rendering ---

# Looks ``k`` up in ``f.messages`` (own properties only), falling back to the
# key itself; an array of keys resolves to the first one present. Every
# ``{n}`` with a matching argument is replaced, the rest stay literal.
_LOOKUP = (
    "var h=Object.prototype.hasOwnProperty;"
    "function r(t,a){"
    "return String(t).replace(/\\{(\\d+)\\}/g,function(s,n){return +n<a.length?String(a[+n]):s;});"
    "}"
    "function l(ms,k){"
    "if(Object.prototype.toString.call(k)==='[object Array]'){"
    "for(var i=0;i<k.length;++i){if(ms&&h.call(ms,k[i]))return ms[k[i]];}"
    "return k[0];"
    "}"
    "return ms&&h.call(ms,k)?ms[k]:k;"
    "}"
)

_FUNCTION_TEMPLATE = (
    "(function(){"
    + _LOOKUP
    + "function f(k){return r(l(f.messages,k),Array.prototype.slice.call(arguments,1));}"
    "f.messages=%s;"
    "return f;"
    "})()"
)

_LANGUAGES_TEMPLATE = (
    "(function(){"
    + _LOOKUP
    + "function f(g,k){"
    "var ms=h.call(f.messages,g)?f.messages[g]:null;"
    "return r(l(ms,k),Array.prototype.slice.call(arguments,2));"
    "}"
    "f.messages=%s;"
    "return f;"
    "})()"
)


def _finish(expression: str, namespace: str | None) -> str:
    if namespace is None:
        return expression
    return wrap_namespace(parse_namespace(namespace), expression)


def render(bundle: Mapping[str, str], options: GenerationOptions) -> str:
    """Render *bundle* as JavaScript according to *options*."""
    if options.namespace is not None:
        parse_namespace(options.namespace)

    keys = select_keys(bundle, options)
    table = render_table(bundle, keys, options.html_safe)
    if options.mode is Mode.ALL_MESSAGES_OBJECT:
        expression = table
    else:
        expression = _FUNCTION_TEMPLATE % table
    return _finish(expression, options.namespace)


def render_function(
    bundle: Mapping[str, str],
    namespace: str | None = None,
    key_subset: Iterable[str] | None = None,
    key_filter: KeyFilter | None = None,
    html_safe: bool = True,
) -> str:
    return render(bundle, GenerationOptions(
        namespace=namespace, key_subset=key_subset, key_filter=key_filter,
        mode=Mode.FUNCTION, html_safe=html_safe,
    ))


def render_all_object(
    bundle: Mapping[str, str],
    namespace: str | None = None,
    key_subset: Iterable[str] | None = None,
    key_filter: KeyFilter | None = None,
    html_safe: bool = True,
) -> str:
    return render(bundle, GenerationOptions(
        namespace=namespace, key_subset=key_subset, key_filter=key_filter,
        mode=Mode.ALL_MESSAGES_OBJECT, html_safe=html_safe,
    ))


def render_languages_function(
    bundles: Mapping[str, Mapping[str, str]],
    namespace: str | None = None,
    key_subset: Iterable[str] | None = None,
    key_filter: KeyFilter | None = None,
    html_safe: bool = True,
) -> str:
    """Render one callable ``f(lang, key, ...args)`` covering several languages."""
    options = GenerationOptions(
        namespace=namespace, key_subset=key_subset, key_filter=key_filter,
        html_safe=html_safe,
    )
    if options.namespace is not None:
        parse_namespace(options.namespace)

    tables = [
        f"{escape_js_string(lang, html_safe)}:"
        f"{render_table(bundles[lang], select_keys(bundles[lang], options), html_safe)}"
        for lang in sorted(bundles)
    ]
    expression = _LANGUAGES_TEMPLATE % ("{" + ",".join(tables) + "}")
    return _finish(expression, options.namespace)


# --- Server-side twin of the emitted substitution ---

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def substitute(template: str, args: tuple[Any, ...] | list[Any]) -> str:
    """Replace ``{n}`` with ``str(args[n])``; tokens without an argument stay literal."""
    def replace(match: re.Match) -> str:
        index = int(match.group(1))
        return str(args[index]) if index < len(args) else match.group(0)

    return _PLACEHOLDER.sub(replace, template)
