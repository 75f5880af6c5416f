"""End-to-end tests for the pipeline driver."""

from __future__ import annotations

import pytest

import jrsx
from jrsx.errors import MalformedAttribute, UnmatchedClosingTag, UnterminatedTag
from jrsx.options import TranspileOptions
from jrsx.transpiler import Transpiler, transpile
from tests.conftest import preamble

# ---------------------------------------------------------------------------
# Pass-through
# ---------------------------------------------------------------------------


class TestPassThrough:
    @pytest.mark.parametrize(
        "source",
        [
            "",
            "plain text\n",
            "<div class=\"box\"><p>Hello</p></div>\n",
            "a < b and c > d",
            "{% if user %}<i>{{ user.name }}</i>{% endif %}",
            "</div>\n<br/>\n<  Spaced>",
            "<Foo-bar>not a component</Foo-bar>",
            "  \r\n\t trailing whitespace  \n\n",
        ],
    )
    def test_unchanged(self, source: str) -> None:
        assert transpile(source) == source

    def test_no_imports_recorded(self) -> None:
        t = Transpiler("<p>hi</p>")
        t.transpile()
        assert t.imports == ()


# ---------------------------------------------------------------------------
# Self-closing tags
# ---------------------------------------------------------------------------


class TestSelfClosing:
    def test_shorthand(self) -> None:
        assert transpile("<Hello name />") == (
            preamble("hello") + "\n{% call hello_scope::hello(name) %}"
        )

    def test_named_quoted(self) -> None:
        assert transpile('<Hello name="world" />') == (
            preamble("hello") + '\n{% call hello_scope::hello(name="world") %}'
        )

    def test_named_with_spaces_around_equals(self) -> None:
        assert transpile('<Hello name = "world" />') == (
            preamble("hello") + '\n{% call hello_scope::hello(name="world") %}'
        )

    def test_bare_expression(self) -> None:
        assert transpile("<List items=user.items />") == (
            preamble("list") + "\n{% call list_scope::list(items=user.items) %}"
        )

    def test_no_attributes(self) -> None:
        assert transpile("<Hr/>") == preamble("hr") + "\n{% call hr_scope::hr() %}"

    def test_mixed_attributes_keep_order(self) -> None:
        out = transpile('<Hello greeting="Hi" name count=3 />')
        assert out.endswith('{% call hello_scope::hello(greeting="Hi", name, count=3) %}')

    def test_multiline_attributes(self) -> None:
        out = transpile('<Hello\n  name\n  greeting="hi"\n/>')
        assert out.endswith('{% call hello_scope::hello(name, greeting="hi") %}')

    def test_gt_inside_quoted_value(self) -> None:
        out = transpile('<Hello title="a > b" />')
        assert out.endswith('{% call hello_scope::hello(title="a > b") %}')

    def test_close_self_closing_option(self) -> None:
        options = TranspileOptions(close_self_closing=True)
        assert transpile("<Hello name />", options) == (
            preamble("hello") + "\n{% call hello_scope::hello(name) %}{% endcall %}"
        )


# ---------------------------------------------------------------------------
# Paired tags and children
# ---------------------------------------------------------------------------


class TestChildren:
    def test_text_children(self) -> None:
        assert transpile("<Child>Super!</Child>") == (
            preamble("child") + "\n{% call child_scope::child() %}Super!{% endcall %}"
        )

    def test_empty_children(self) -> None:
        assert transpile("<Child></Child>").endswith(
            "{% call child_scope::child() %}{% endcall %}"
        )

    def test_closing_tag_with_whitespace(self) -> None:
        assert transpile("<Child>x</Child >").endswith(
            "{% call child_scope::child() %}x{% endcall %}"
        )

    def test_html_children_untouched(self) -> None:
        out = transpile('<Layout title="Home">\n  <div class="x">hi</div>\n</Layout>')
        assert out == (
            preamble("layout")
            + '\n{% call layout_scope::layout(title="Home") %}'
            + '\n  <div class="x">hi</div>\n'
            + "{% endcall %}"
        )

    def test_nested_components(self) -> None:
        out = transpile('<Card title="x"><Hello name /></Card>')
        assert out == (
            preamble("card", "hello")
            + '\n{% call card_scope::card(title="x") %}'
            + "{% call hello_scope::hello(name) %}"
            + "{% endcall %}"
        )

    def test_same_name_nesting(self) -> None:
        assert transpile("<Box><Box>in</Box></Box>") == (
            preamble("box")
            + "\n{% call box_scope::box() %}"
            + "{% call box_scope::box() %}in{% endcall %}"
            + "{% endcall %}"
        )

    def test_deep_nesting_with_text(self) -> None:
        out = transpile("<A>1<B>2<C />3</B>4</A>")
        assert out == (
            preamble("a", "b", "c")
            + "\n{% call a_scope::a() %}1"
            + "{% call b_scope::b() %}2{% call c_scope::c() %}3{% endcall %}"
            + "4{% endcall %}"
        )

    def test_unfinished_name_before_close(self) -> None:
        assert transpile("<A>x <B</A>") == (
            preamble("a") + "\n{% call a_scope::a() %}x <B{% endcall %}"
        )

    def test_bracketed_gt_in_attribute(self) -> None:
        assert transpile("<Hello show=(a>b) />") == (
            preamble("hello") + "\n{% call hello_scope::hello(show=(a>b)) %}"
        )


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


class TestImports:
    def test_deduplicated(self) -> None:
        source = "<Hello name />\n<Hello name />\n<Hello name />\n"
        assert transpile(source) == (
            preamble("hello") + "\n" + "{% call hello_scope::hello(name) %}\n" * 3
        )

    def test_first_use_order(self) -> None:
        out = transpile("<Beta /><Alpha /><Beta />")
        assert out.startswith(preamble("beta", "alpha") + "\n")

    def test_parent_imported_before_children(self) -> None:
        out = transpile("<Outer><Inner /></Outer>")
        assert out.startswith(preamble("outer", "inner") + "\n")

    def test_custom_naming(self) -> None:
        options = TranspileOptions(extension="jinja", scope_suffix="_mod")
        assert transpile("<Hello />", options) == (
            '{%- import "hello.jinja" as hello_mod -%}\n\n{% call hello_mod::hello() %}'
        )

    def test_imports_property(self) -> None:
        t = Transpiler("<A /><B /><A />")
        t.transpile()
        assert [s.scope_alias for s in t.imports] == ["a_scope", "b_scope"]

    def test_each_call_is_independent(self) -> None:
        transpile("<A />")
        assert transpile("<p></p>") == "<p></p>"


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_text_and_tags_interleaved(self) -> None:
        source = "<h1>Title</h1>\n<Hello name />\n<p>text</p>\n<Child>x</Child>\n"
        assert transpile(source) == (
            preamble("hello", "child")
            + "\n<h1>Title</h1>\n"
            + "{% call hello_scope::hello(name) %}\n"
            + "<p>text</p>\n"
            + "{% call child_scope::child() %}x{% endcall %}\n"
        )

    def test_package_level_transpile(self) -> None:
        assert jrsx.transpile("x <Hello /> y") == (
            preamble("hello") + "\nx {% call hello_scope::hello() %} y"
        )


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_missing_closing_tag(self) -> None:
        with pytest.raises(UnterminatedTag) as exc_info:
            transpile("<Child>Super!")
        assert exc_info.value.offset == 0

    def test_innermost_unclosed_reported(self) -> None:
        with pytest.raises(UnterminatedTag, match="<B>") as exc_info:
            transpile("<A>x<B>y")
        assert exc_info.value.offset == 4

    def test_open_tag_runs_to_eof(self) -> None:
        with pytest.raises(UnterminatedTag):
            transpile("<Hello name")

    def test_bare_name_at_eof(self) -> None:
        with pytest.raises(UnterminatedTag):
            transpile("text <Hello")

    def test_stray_closing_tag(self) -> None:
        with pytest.raises(UnmatchedClosingTag) as exc_info:
            transpile("text </Hello>")
        assert exc_info.value.offset == 5

    def test_mismatched_closing_tag(self) -> None:
        with pytest.raises(UnmatchedClosingTag, match="does not match") as exc_info:
            transpile("<A><B></A></B>")
        assert exc_info.value.offset == 6

    def test_unterminated_quote(self) -> None:
        with pytest.raises(MalformedAttribute) as exc_info:
            transpile('<Hello name="world />')
        assert exc_info.value.offset == 12

    def test_unclosed_bracket(self) -> None:
        with pytest.raises(MalformedAttribute, match=r"missing '\)'") as exc_info:
            transpile("<Hello x=(1 />")
        assert exc_info.value.offset == 9

    def test_bad_attribute_in_child(self) -> None:
        with pytest.raises(MalformedAttribute) as exc_info:
            transpile("<Card>\n<Hello 1x />\n</Card>")
        assert exc_info.value.span.start.line == 2
