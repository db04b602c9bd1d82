"""
Two-stage rendering of page bodies.

Stage one binds the per-request values into the body. Page bodies use the
Go-style action syntax the game pages were written with (``{{.Name}}``,
``{{if .Locked}}...{{else}}...{{end}}``); it is translated into a Jinja2
template and rendered with strict undefined handling. Stage two converts
the resulting markdown to HTML with Python-Markdown.

Python-Markdown follows the original Markdown rules rather than CommonMark in
one place page authors notice: a list cannot interrupt a paragraph. Leave a
blank line between a text line and the list that follows it, otherwise the
list items render as part of the paragraph.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import jinja2
import markdown

from ..errors import ConfigError, RenderError, TemplateError
from .models import RenderContext

DEFAULT_MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "def_list", "sane_lists"]

# Trim markers need whitespace between the dash and the action text
_ACTION_RE = re.compile(r"\{\{(?:(-)\s)?\s*(.*?)\s*(?:\s(-))?\}\}", re.DOTALL)

_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<lparen>\()
      | (?P<rparen>\))
      | (?P<string>"(?:\\.|[^"\\])*"|`[^`]*`)
      | (?P<field>\.[A-Za-z_][A-Za-z0-9_]*)
      | (?P<number>[+-]?\d+(?:\.\d+)?)
      | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
      | (?P<other>\S)
    )""",
    re.VERBOSE,
)

_UNSUPPORTED_ACTIONS = {
    "range", "with", "define", "template", "block", "break", "continue",
}

_COMPARISONS = {"ne": "!=", "lt": "<", "le": "<=", "gt": ">", "ge": ">="}

_LITERALS = "_literals"

TEMPLATE_FIELDS = tuple(RenderContext().template_vars())


def _format_value(value: Any) -> Any:
    """Print booleans the way page authors write them."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


@dataclass
class _Action:
    text: str
    trim_left: bool
    trim_right: bool


class TemplateTranslator:
    """Translates Go-style page templates into Jinja2 source.

    Text between actions is never handed to Jinja2 as template source: each
    chunk becomes an entry of a literal list and is emitted by index, so
    page text containing Jinja2 syntax is printed verbatim. Field references
    are checked against the render context fields while translating.
    """

    def __init__(self, fields: Optional[Sequence[str]] = None):
        self.fields = frozenset(TEMPLATE_FIELDS if fields is None else fields)

    def translate(self, source: str) -> Tuple[str, List[str]]:
        """Translate a page template.

        Returns:
            Jinja2 source and the literal text chunks it references

        Raises:
            TemplateError: For malformed or unsupported template syntax
        """
        pieces = self._split(source)
        self._apply_trim(pieces)

        out: List[str] = []
        literals: List[str] = []
        blocks: List[Dict[str, bool]] = []

        for piece in pieces:
            if isinstance(piece, str):
                if piece:
                    out.append(f"{{{{ {_LITERALS}[{len(literals)}] }}}}")
                    literals.append(piece)
                continue
            out.append(self._translate_action(piece.text, blocks))

        if blocks:
            raise TemplateError("unexpected EOF: missing {{end}}")

        return "".join(out), literals

    @staticmethod
    def _split(source: str) -> List[Any]:
        pieces: List[Any] = []
        pos = 0
        for match in _ACTION_RE.finditer(source):
            pieces.append(source[pos:match.start()])
            pieces.append(
                _Action(
                    text=match.group(2),
                    trim_left=match.group(1) is not None,
                    trim_right=match.group(3) is not None,
                )
            )
            pos = match.end()
        rest = source[pos:]
        if "{{" in rest:
            raise TemplateError("unclosed action: missing '}}'")
        pieces.append(rest)
        return pieces

    @staticmethod
    def _apply_trim(pieces: List[Any]) -> None:
        # Pieces alternate text, action, text, ... so neighbours are text
        for index, piece in enumerate(pieces):
            if not isinstance(piece, _Action):
                continue
            if piece.trim_left:
                pieces[index - 1] = pieces[index - 1].rstrip()
            if piece.trim_right:
                pieces[index + 1] = pieces[index + 1].lstrip()

    def _translate_action(self, text: str, blocks: List[Dict[str, bool]]) -> str:
        if not text:
            raise TemplateError("missing value for command")

        if text.startswith("/*"):
            if not text.endswith("*/"):
                raise TemplateError("unclosed comment")
            return ""

        keyword, rest = self._keyword(text)

        if keyword == "if":
            if not rest:
                raise TemplateError("missing value for if")
            blocks.append({"else": False})
            return f"{{% if {self._translate_pipeline(rest)} %}}"

        if keyword == "else":
            if not blocks:
                raise TemplateError("unexpected {{else}}")
            if blocks[-1]["else"]:
                raise TemplateError("{{else}} after final {{else}}")
            sub_keyword, condition = self._keyword(rest) if rest else ("", "")
            if sub_keyword == "if":
                if not condition:
                    raise TemplateError("missing value for if")
                return f"{{% elif {self._translate_pipeline(condition)} %}}"
            if rest:
                raise TemplateError(f"unexpected {rest!r} in else")
            blocks[-1]["else"] = True
            return "{% else %}"

        if keyword == "end":
            if rest:
                raise TemplateError(f"unexpected {rest!r} in end")
            if not blocks:
                raise TemplateError("unexpected {{end}}")
            blocks.pop()
            return "{% endif %}"

        if keyword in _UNSUPPORTED_ACTIONS:
            raise TemplateError(f"unsupported action: {keyword}")

        return f"{{{{ {self._translate_pipeline(text)} }}}}"

    @staticmethod
    def _keyword(text: str) -> Tuple[str, str]:
        parts = text.split(None, 1)
        return parts[0], parts[1].strip() if len(parts) > 1 else ""

    def _translate_pipeline(self, text: str) -> str:
        tokens = self._tokenize(text)
        expression, pos = self._command(tokens, 0)
        if pos != len(tokens):
            raise TemplateError(f"unexpected {tokens[pos][1]!r} in command")
        return expression

    @staticmethod
    def _tokenize(text: str) -> List[Tuple[str, str]]:
        tokens: List[Tuple[str, str]] = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            if match is None:
                break
            kind = match.lastgroup or "other"
            value = match.group(kind)
            if kind == "other":
                if value == "|":
                    raise TemplateError("pipelines are not supported")
                raise TemplateError(f"unexpected {value!r} in operand")
            tokens.append((kind, value))
            pos = match.end()
        return tokens

    def _command(self, tokens: Sequence[Tuple[str, str]], pos: int) -> Tuple[str, int]:
        if pos >= len(tokens):
            raise TemplateError("missing value for command")

        kind, value = tokens[pos]
        if kind == "ident" and value not in ("true", "false"):
            args: List[str] = []
            pos += 1
            while pos < len(tokens) and tokens[pos][0] != "rparen":
                arg, pos = self._operand(tokens, pos)
                args.append(arg)
            return self._call(value, args), pos

        operand, pos = self._operand(tokens, pos)
        if pos < len(tokens) and tokens[pos][0] != "rparen":
            raise TemplateError(f"can't give argument to non-function {operand}")
        return operand, pos

    def _operand(self, tokens: Sequence[Tuple[str, str]], pos: int) -> Tuple[str, int]:
        kind, value = tokens[pos]
        if kind == "field":
            name = value[1:]
            if not name[0].isupper():
                raise TemplateError(f"{name} is an unexported field")
            if name not in self.fields:
                raise TemplateError(f"can't evaluate field {name}")
            return name, pos + 1
        if kind == "string":
            if value.startswith("`"):
                return repr(value[1:-1]), pos + 1
            return value, pos + 1
        if kind == "number":
            return value, pos + 1
        if kind == "ident" and value in ("true", "false"):
            return value, pos + 1
        if kind == "lparen":
            inner, pos = self._command(tokens, pos + 1)
            if pos >= len(tokens) or tokens[pos][0] != "rparen":
                raise TemplateError("unclosed left paren")
            return f"({inner})", pos + 1
        if kind == "ident":
            raise TemplateError(f"function {value!r} must be called in parentheses")
        raise TemplateError(f"unexpected {value!r} in operand")

    @staticmethod
    def _call(function: str, args: List[str]) -> str:
        if function == "not":
            if len(args) != 1:
                raise TemplateError(f"wrong number of args for not: want 1 got {len(args)}")
            return f"(not {args[0]})"
        if function in ("and", "or"):
            if not args:
                raise TemplateError(f"wrong number of args for {function}: want at least 1 got 0")
            return "(" + f" {function} ".join(args) + ")"
        if function == "eq":
            if len(args) < 2:
                raise TemplateError(f"wrong number of args for eq: want at least 2 got {len(args)}")
            first = args[0]
            return "(" + " or ".join(f"{first} == {other}" for other in args[1:]) + ")"
        if function in _COMPARISONS:
            if len(args) != 2:
                raise TemplateError(
                    f"wrong number of args for {function}: want 2 got {len(args)}"
                )
            return f"({args[0]} {_COMPARISONS[function]} {args[1]})"
        raise TemplateError(f"function {function!r} not defined")


class ContentRenderer:
    """Renders page bodies: template substitution, then markdown to HTML.

    Holds no per-render state; a fresh markdown converter is built for every
    call, so one renderer can serve concurrent requests.
    """

    def __init__(self, markdown_extensions: Optional[Sequence[str]] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.markdown_extensions = list(
            DEFAULT_MARKDOWN_EXTENSIONS if markdown_extensions is None else markdown_extensions
        )
        self.translator = TemplateTranslator()
        self.environment = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            finalize=_format_value,
        )

        # Fail early on unknown extensions instead of on the first request
        try:
            self._new_converter()
        except Exception as e:
            raise ConfigError(
                f"Invalid markdown extensions {self.markdown_extensions}: {e}"
            ) from e

    def _new_converter(self) -> markdown.Markdown:
        return markdown.Markdown(extensions=self.markdown_extensions, output_format="html")

    def render(self, body: bytes, ctx: RenderContext) -> str:
        """Render a page body to HTML.

        Args:
            body: Raw page body (template + markdown)
            ctx: Per-request values

        Returns:
            Rendered HTML

        Raises:
            TemplateError: If the template is malformed or references an
                unbound variable
            RenderError: If the markdown transform fails
        """
        text = self.substitute(body, ctx)
        return self.to_html(text)

    def substitute(self, body: bytes, ctx: RenderContext) -> str:
        """Stage one: bind the render context into the body template."""
        source = body.decode("utf-8", errors="replace")
        jinja_source, literals = self.translator.translate(source)

        try:
            template = self.environment.from_string(jinja_source)
            result = template.render(ctx.template_vars(), **{_LITERALS: literals})
        except jinja2.TemplateError as e:
            raise TemplateError(f"template error: {e}", e) from e
        except TypeError as e:
            raise TemplateError(f"incompatible types in template: {e}", e) from e

        self.logger.debug(
            f"Substituted template for '{ctx.player_name}' (locked={ctx.locked})"
        )
        return result

    def to_html(self, text: str) -> str:
        """Stage two: convert markdown to HTML."""
        try:
            return self._new_converter().convert(text)
        except Exception as e:
            raise RenderError(f"markdown conversion failed: {e}", e) from e
