"""One entry point for rendering a message source as JavaScript.

Usage::

    from jsmessages.i18n import MessageSource
    from jsmessages.messages import JsMessages

    source = MessageSource()
    js_messages = JsMessages.all(source)
    js_messages('fr', namespace='window.Messages')        # function script
    js_messages.all_messages('fr', namespace='window.AllMessages')  # raw templates

    errors = JsMessages.subset(source, 'error.required', 'error.number')
    forms = JsMessages.filtering(source, lambda key: key.startswith('form.'))
"""

from collections.abc import Iterable

from jsmessages.generator import (
    KeyFilter,
    render_all_object,
    render_function,
    render_languages_function,
)
from jsmessages.i18n import MessageSource
from jsmessages.util import script_tag


class JsMessages:
    """A message source bound to one key selection (all, subset or filter).

    The language is always an explicit argument; this class never looks at
    the current request.
    """

    def __init__(
        self,
        source: MessageSource,
        key_subset: Iterable[str] | None = None,
        key_filter: KeyFilter | None = None,
    ) -> None:
        if key_subset is not None and key_filter is not None:
            raise ValueError('key_subset and key_filter are mutually exclusive')
        if isinstance(key_subset, str):
            raise TypeError('key_subset must be an iterable of keys, not a str')
        self.source = source
        self.key_subset = frozenset(key_subset) if key_subset is not None else None
        self.key_filter = key_filter

    @classmethod
    def all(cls, source: MessageSource) -> 'JsMessages':
        return cls(source)

    @classmethod
    def subset(cls, source: MessageSource, *keys: str) -> 'JsMessages':
        return cls(source, key_subset=keys)

    @classmethod
    def filtering(cls, source: MessageSource, key_filter: KeyFilter) -> 'JsMessages':
        return cls(source, key_filter=key_filter)

    def __call__(self, lang: str | None, namespace: str | None = None) -> str:
        return render_function(
            self.source.bundle(lang), namespace=namespace,
            key_subset=self.key_subset, key_filter=self.key_filter,
        )

    def all_messages(self, lang: str | None, namespace: str | None = None) -> str:
        return render_all_object(
            self.source.bundle(lang), namespace=namespace,
            key_subset=self.key_subset, key_filter=self.key_filter,
        )

    def languages(self, namespace: str | None = None) -> str:
        return render_languages_function(
            self.source.bundles(), namespace=namespace,
            key_subset=self.key_subset, key_filter=self.key_filter,
        )

    def html(self, lang: str | None, namespace: str | None = None) -> str:
        return script_tag(self(lang, namespace))
