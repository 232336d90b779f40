"""Tests for the Jinja2 template engine."""

import ast

import pytest

from lexgen.lexicon import load
from lexgen.templates import (
    CodeTemplateEngine,
    TemplateCompilationError,
    TemplateRenderError,
    get_default_engine,
)
from lexgen.templates.engine import _filter_docstring, _filter_pystr


class TestFilters:
    """Test the custom Jinja2 filters."""

    def test_docstring_escapes_triple_quotes(self):
        text = _filter_docstring('He said """hi"""')
        assert '"""' not in text
        ast.parse(f'"""{text}"""')

    def test_docstring_escapes_trailing_quote(self):
        text = _filter_docstring('ends with "quote"')
        ast.parse(f'"""{text}"""')

    def test_docstring_escapes_backslashes(self):
        text = _filter_docstring("C:\\path\\new")
        assert ast.literal_eval(f'"""{text}"""') == "C:\\path\\new"

    def test_docstring_strips(self):
        assert _filter_docstring("  padded\n") == "padded"
        assert _filter_docstring(None) == ""

    def test_pystr(self):
        assert _filter_pystr("app.bsky.feed.post") == '"app.bsky.feed.post"'
        assert ast.literal_eval(_filter_pystr('a "b" \\ c')) == 'a "b" \\ c'


class TestEngine:
    """Test template lookup and rendering."""

    def test_default_engine_is_shared(self):
        assert get_default_engine() is get_default_engine()

    def test_missing_template(self):
        engine = CodeTemplateEngine()
        with pytest.raises(TemplateCompilationError, match="not found") as exc_info:
            engine.render("nope.py.j2", {})
        assert exc_info.value.template_name == "nope.py.j2"

    def test_missing_binding_is_an_error(self):
        engine = CodeTemplateEngine()
        with pytest.raises(TemplateRenderError):
            engine.render("structs.py.j2", {"package": "atproto"})

    def test_custom_filters(self, post_doc):
        engine = CodeTemplateEngine(custom_filters={"pystr": lambda value: f"'{value}'"})
        code = engine.render("structs.py.j2", {"lexicon": load(post_doc), "package": "atproto"})
        assert "__type__ = 'app.bsky.feed.post#replyRef'" in code

    @pytest.mark.parametrize("name", ["__init__.py", "runtime.py", "tid.py"])
    def test_common_templates_are_valid_python(self, name):
        code = get_default_engine().render(f"common/{name}.j2", {"package": "atproto"})
        ast.parse(code)

    def test_package_name_in_init(self):
        code = get_default_engine().render("common/__init__.py.j2", {"package": "my_bindings"})
        assert "Package: my_bindings" in code
