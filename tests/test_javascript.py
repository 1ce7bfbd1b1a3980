"""Run the generated scripts in V8 and check what the browser would see."""

import json

import pytest
from py_mini_racer import MiniRacer

from jsmessages.generator import render_all_object, render_function, render_languages_function
from jsmessages.messages import JsMessages


BUNDLE = {
    "greeting": "Hello {0}!",
    "pair": "{0} and {1}",
    "twice": "{0}, {0}",
    "error.required": "Required",
    "tricky": 'a"b</script> c',
    "lines": "one two\nthree",
}


@pytest.fixture
def js():
    ctx = MiniRacer()
    # Browser-like global for namespaces rooted at window
    ctx.eval("var window = this;")
    return ctx


def evaluate(ctx: MiniRacer, expression: str):
    return json.loads(ctx.eval(f"JSON.stringify({expression})"))


class TestFunction:
    @pytest.fixture
    def messages(self, js):
        js.eval("var M = " + render_function(BUNDLE) + ";")
        return js

    @pytest.mark.parametrize("call,expected", [
        ('M("greeting", "World")', "Hello World!"),
        ('M("missing")', "missing"),
        ('M("pair", "x")', "x and {1}"),
        ('M("pair", "x", "y")', "x and y"),
        ('M("twice", "ho")', "ho, ho"),
        ('M("greeting", 3)', "Hello 3!"),
        ('M("greeting", "$&")', "Hello $&!"),
        ('M("greeting")', "Hello {0}!"),
        ('M("tricky")', 'a"b</script> c'),
        ('M("lines")', "one two\nthree"),
    ])
    def test_lookup_and_substitution(self, messages, call, expected):
        assert evaluate(messages, call) == expected

    @pytest.mark.parametrize("call,expected", [
        ('M(["nope", "greeting"], "Z")', "Hello Z!"),
        ('M(["greeting", "pair"], "Z")', "Hello Z!"),
        ('M(["nope", "nada"])', "nope"),
    ])
    def test_array_keys(self, messages, call, expected):
        assert evaluate(messages, call) == expected

    @pytest.mark.parametrize("key", ["toString", "constructor", "hasOwnProperty", "__proto__"])
    def test_prototype_names_are_missing_keys(self, messages, key):
        assert evaluate(messages, f'M("{key}")') == key

    def test_messages_table_exposed(self, messages):
        assert evaluate(messages, "M.messages") == BUNDLE

    def test_subset(self, js):
        js.eval("var M = " + render_function(BUNDLE, key_subset=["greeting"]) + ";")
        assert evaluate(js, 'M("greeting", "A")') == "Hello A!"
        assert evaluate(js, 'M("pair", "A")') == "pair"


class TestAllObject:
    def test_raw_templates(self, js):
        js.eval("var T = " + render_all_object(BUNDLE) + ";")
        assert evaluate(js, "T") == BUNDLE
        assert evaluate(js, 'T["greeting"]') == "Hello {0}!"


class TestLanguagesFunction:
    @pytest.fixture
    def messages(self, js):
        bundles = {
            "en": {"greeting": "Hello {0}!", "only.en": "English"},
            "fr": {"greeting": "Bonjour {0} !"},
        }
        js.eval("var L = " + render_languages_function(bundles) + ";")
        return js

    @pytest.mark.parametrize("call,expected", [
        ('L("fr", "greeting", "Z")', "Bonjour Z !"),
        ('L("en", "greeting", "Z")', "Hello Z!"),
        ('L("fr", "only.en")', "only.en"),
        ('L("xx", "greeting")', "greeting"),
        ('L("toString", "greeting")', "greeting"),
        ('L("fr", ["nope", "greeting"], "Z")', "Bonjour Z !"),
    ])
    def test_lookup(self, messages, call, expected):
        assert evaluate(messages, call) == expected


class TestNamespace:
    def test_guarded_parents_created(self, js):
        js.eval(render_function(BUNDLE, namespace="app.i18n.Messages"))
        assert evaluate(js, 'app.i18n.Messages("greeting", "A")') == "Hello A!"

    def test_existing_parents_kept(self, js):
        js.eval("var app = {version: 2, i18n: {locale: 'en'}};")
        js.eval(render_function(BUNDLE, namespace="app.i18n.Messages"))
        assert evaluate(js, "app.version") == 2
        assert evaluate(js, "app.i18n.locale") == "en"
        assert evaluate(js, 'app.i18n.Messages("missing")') == "missing"

    def test_window_root(self, js):
        js.eval(render_function(BUNDLE, namespace="window.Foo.Bar"))
        assert evaluate(js, 'window.Foo.Bar("greeting", "B")') == "Hello B!"
        assert evaluate(js, 'Foo.Bar("greeting", "B")') == "Hello B!"

    def test_single_segment(self, js):
        js.eval(render_function(BUNDLE, namespace="Messages"))
        assert evaluate(js, 'Messages("greeting", "C")') == "Hello C!"

    def test_all_object_namespaced(self, js):
        js.eval(render_all_object(BUNDLE, namespace="window.AllMessages"))
        assert evaluate(js, "AllMessages.pair") == "{0} and {1}"

    def test_two_scripts_share_parents(self, js):
        js.eval(render_function({"a": "A"}, namespace="app.i18n.One"))
        js.eval(render_all_object({"b": "B"}, namespace="app.i18n.Two"))
        assert evaluate(js, 'app.i18n.One("a")') == "A"
        assert evaluate(js, "app.i18n.Two") == {"b": "B"}


class TestServedScripts:
    def test_messages_js(self, js, client):
        resp = client.get("/messages.js", params={"lang": "fr"})
        js.eval(resp.text)
        assert evaluate(js, 'Messages("hello", "Anand")') == "Bonjour Anand"
        assert evaluate(js, 'Messages("index.title")') == "Messages localisés"

    def test_languages_js(self, js, client):
        resp = client.get("/messages/languages.js", params={"namespace": "window.AllMessages"})
        js.eval(resp.text)
        assert evaluate(js, 'AllMessages("la", "hello", "Anand")') == "Salve Anand"
        assert evaluate(js, 'AllMessages("hi", "hello", "Anand")') == "नमस्ते Anand"
        assert evaluate(js, 'AllMessages("es", "hello")') == "hello"

    def test_inline_html_script(self, js, message_source):
        html = JsMessages.subset(message_source, "greeting").html("fr", namespace="window.Messages")
        assert html.startswith("<script>") and html.endswith("</script>")
        js.eval(html[len("<script>"):-len("</script>")])
        assert evaluate(js, 'Messages("greeting", "Ann")') == "Bonjour Ann !"
