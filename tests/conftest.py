import json

import pytest
from starlette.testclient import TestClient

from jsmessages.i18n import MessageSource
from jsmessages.main import app


LOCALES = {
    "en": {
        "greeting": "Hello {0}!",
        "farewell": "Goodbye {0} and {1}",
        "form": {"required": "Required", "number": "Not a number"},
    },
    "fr": {
        "greeting": "Bonjour {0} !",
        "form": {"required": "Obligatoire"},
    },
    "de": {
        "greeting": "Hallo {0}!",
    },
}


def split_function(script: str) -> dict[str, str]:
    """Return the message table embedded in a rendered function script."""
    table = script.split("f.messages=", 1)[1].rsplit(";return f;", 1)[0]
    return json.loads(table)


@pytest.fixture
def locales_dir(tmp_path):
    for lang, messages in LOCALES.items():
        (tmp_path / f"{lang}.json").write_text(json.dumps(messages), encoding="utf-8")
    return tmp_path


@pytest.fixture
def message_source(locales_dir):
    return MessageSource(locales_dir=locales_dir, default_lang="en", fallback="en")


@pytest.fixture
def client():
    return TestClient(app)
