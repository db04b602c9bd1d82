"""Tests for template substitution and markdown rendering."""

import pytest

from gamepages.errors import ConfigError, RenderError, TemplateError
from gamepages.pages.models import RenderContext
from gamepages.pages.renderer import ContentRenderer, TemplateTranslator

ALEX = RenderContext("Alex", False)
ALEX_LOCKED = RenderContext("Alex", True)


@pytest.fixture
def renderer() -> ContentRenderer:
    return ContentRenderer()


class TestSubstitution:
    """Test stage one: binding Name and Locked into the body."""

    def test_name(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"Hello {{.Name}}!", ALEX) == "Hello Alex!"

    def test_spaces_inside_action(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"Hello {{ .Name }}", ALEX) == "Hello Alex"

    def test_if_else(self, renderer: ContentRenderer) -> None:
        body = b"{{if .Locked}}closed{{else}}open{{end}}"
        assert renderer.substitute(body, ALEX) == "open"
        assert renderer.substitute(body, ALEX_LOCKED) == "closed"

    def test_else_if(self, renderer: ContentRenderer) -> None:
        body = b'{{if .Locked}}closed{{else if eq .Name "Alex"}}hi Alex{{else}}hi{{end}}'
        assert renderer.substitute(body, ALEX) == "hi Alex"
        assert renderer.substitute(body, RenderContext("Sam", False)) == "hi"

    def test_functions(self, renderer: ContentRenderer) -> None:
        body = b"{{if not .Locked}}a{{end}}{{if and .Locked (eq .Name `Alex`)}}b{{end}}"
        assert renderer.substitute(body, ALEX) == "a"
        assert renderer.substitute(body, ALEX_LOCKED) == "b"

    def test_ne_and_or(self, renderer: ContentRenderer) -> None:
        body = b'{{if or .Locked (ne .Name "Alex")}}x{{else}}y{{end}}'
        assert renderer.substitute(body, ALEX) == "y"
        assert renderer.substitute(body, RenderContext("Sam", False)) == "x"

    def test_booleans_print_lowercase(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"{{.Locked}} {{not .Locked}}", ALEX) == "false true"

    def test_trim_markers(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"a  {{- .Name -}}  \n b", ALEX) == "aAlexb"

    def test_comment_removed(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"a{{/* note to self */}}b", ALEX) == "ab"

    def test_jinja_syntax_in_text_is_literal(self, renderer: ContentRenderer) -> None:
        """Test page text is never interpreted as Jinja2 source."""
        body = b"{% raw %} {# x #} {%endraw%} {{.Name}}"
        assert renderer.substitute(body, ALEX) == "{% raw %} {# x #} {%endraw%} Alex"

    def test_name_not_escaped(self, renderer: ContentRenderer) -> None:
        assert renderer.substitute(b"{{.Name}}", RenderContext("<b>A&B</b>", False)) == "<b>A&B</b>"


class TestSubstitutionErrors:
    """Test template errors."""

    @pytest.mark.parametrize(
        "body",
        [
            b"{{.Missing}}",
            b"{{if .Unknown}}x{{end}}",
            b"{{if .Locked}}x",
            b"x{{end}}",
            b"{{else}}",
            b"{{if .Locked}}a{{else}}b{{else}}c{{end}}",
            b"{{.Name",
            b"{{}}",
            b"{{if}}x{{end}}",
            b"{{range .Name}}x{{end}}",
            b"{{.name}}",
            b"{{.Name | printf}}",
            b"{{.Name .Locked}}",
            b"{{frobnicate .Name}}",
            b"{{not .Locked .Locked}}",
            b"{{(not .Locked}}",
            b"{{/* unclosed }}",
            b"{{$x}}",
            b"{{.True}}",
            b"{{.False}}",
            b"{{if .None}}x{{end}}",
        ],
    )
    def test_template_errors(self, renderer: ContentRenderer, body: bytes) -> None:
        with pytest.raises(TemplateError):
            renderer.render(body, ALEX)

    def test_incompatible_comparison(self, renderer: ContentRenderer) -> None:
        with pytest.raises(TemplateError):
            renderer.render(b"{{if lt .Name 3}}x{{end}}", ALEX)

    def test_unknown_field_rejected_when_translating(self) -> None:
        """Test fields outside the render context fail before rendering."""
        with pytest.raises(TemplateError, match="can't evaluate field True"):
            TemplateTranslator().translate("{{.True}}")
        source, _ = TemplateTranslator(fields=["Score"]).translate("{{.Score}}")
        assert source == "{{ Score }}"

    def test_translate_output(self) -> None:
        """Test the generated Jinja2 source for a conditional."""
        source, literals = TemplateTranslator().translate("{{if .Locked}}a{{end}}")
        assert source == "{% if Locked %}{{ _literals[0] }}{% endif %}"
        assert literals == ["a"]


class TestMarkdown:
    """Test stage two: markdown to HTML."""

    def test_paragraph(self, renderer: ContentRenderer) -> None:
        assert renderer.render(b"Hello {{.Name}}", ALEX) == "<p>Hello Alex</p>"

    def test_conditional_hides_markdown_blocks(self, renderer: ContentRenderer) -> None:
        body = b"{{if .Locked}}\n# Locked out\n{{else}}\n# Welcome\n\n- one\n- two\n{{end}}\n"
        html = renderer.render(body, ALEX)
        assert "<h1>Welcome</h1>" in html
        assert "<li>one</li>" in html
        assert "Locked out" not in html

    def test_common_markup(self, renderer: ContentRenderer) -> None:
        body = (
            b"*em* **strong** `code` [link](http://example.com)\n\n"
            b"> quoted\n\n"
            b"```\nfenced\n```\n"
        )
        html = renderer.render(body, ALEX)
        assert "<em>em</em>" in html
        assert "<strong>strong</strong>" in html
        assert "<code>code</code>" in html
        assert '<a href="http://example.com">link</a>' in html
        assert "<blockquote>" in html
        assert "<pre><code>fenced\n</code></pre>" in html

    def test_list_needs_blank_line_after_paragraph(self, renderer: ContentRenderer) -> None:
        """Test a list directly under a text line stays inside the paragraph."""
        html = renderer.render(b"Items:\n- a\n- b\n", ALEX)
        assert "<ul>" not in html
        assert html.startswith("<p>Items:")

        html = renderer.render(b"Items:\n\n- a\n- b\n", ALEX)
        assert "<p>Items:</p>" in html
        assert "<li>a</li>" in html

    def test_render_is_deterministic(self, renderer: ContentRenderer) -> None:
        body = b"# Title\n\n{{.Name}} {{if .Locked}}x{{end}}"
        assert renderer.render(body, ALEX) == renderer.render(body, ALEX)

    def test_markdown_failure_is_render_error(
        self, renderer: ContentRenderer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class BrokenConverter:
            def convert(self, text: str) -> str:
                raise RuntimeError("boom")

        monkeypatch.setattr(renderer, "_new_converter", lambda: BrokenConverter())
        with pytest.raises(RenderError) as exc_info:
            renderer.render(b"text", ALEX)
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_unknown_extension(self) -> None:
        with pytest.raises(ConfigError):
            ContentRenderer(["no_such_markdown_extension"])

    def test_no_extensions(self) -> None:
        renderer = ContentRenderer([])
        assert renderer.render(b"plain", ALEX) == "<p>plain</p>"
