"""Minimal mustache-style renderer for prompt templates.

Supported tags:

- ``{{key}}``, ``{{{key}}}`` and ``{{& key}}`` substitute a value. Values are
  not HTML-escaped since prompts are plain text.
- ``{{#key}}...{{/key}}`` renders its body when the value is truthy.
- ``{{^key}}...{{/key}}`` renders its body when the value is falsy or absent.
- ``{{! comment}}`` renders nothing.

A variable whose key is missing from the context is emitted unchanged,
so ``render("{{x}}{{y}}", {"x": "a"}) == "a{{y}}"``. Partials, loops and
delimiter changes are not supported and raise TemplateSyntaxError.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from wordwise.core.errors import WordWiseError

_OPEN = "{{"


class TemplateSyntaxError(WordWiseError):
    """Raised when a prompt template cannot be parsed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.position = position


@dataclass
class _Text:
    text: str


@dataclass
class _Variable:
    key: str
    raw: str  # original tag text, emitted when the key is unknown


@dataclass
class _Section:
    key: str
    inverted: bool
    children: list = field(default_factory=list)


def parse(template: str) -> list:
    """Parse a template into a node tree.

    Raises:
        TemplateSyntaxError: Unterminated tag, empty tag, unsupported tag
            type, or unbalanced section tags.
    """
    root: list = []
    current = root
    stack: list[tuple[_Section, list, int]] = []
    pos = 0

    while True:
        start = template.find(_OPEN, pos)
        if start == -1:
            if pos < len(template):
                current.append(_Text(template[pos:]))
            break
        if start > pos:
            current.append(_Text(template[pos:start]))

        triple = template.startswith("{{{", start)
        close = "}}}" if triple else "}}"
        body_start = start + len(close)
        end = template.find(close, body_start)
        if end == -1:
            raise TemplateSyntaxError("Unterminated tag", start)

        raw = template[start:end + len(close)]
        body = template[body_start:end].strip()
        pos = end + len(close)

        if not body:
            raise TemplateSyntaxError("Empty tag", start)

        if triple:
            current.append(_Variable(body, raw))
            continue

        sigil = body[0]
        if sigil == "!":
            continue
        if sigil == ">":
            raise TemplateSyntaxError("Partials are not supported", start)
        if sigil == "=":
            raise TemplateSyntaxError("Delimiter changes are not supported", start)

        name = body[1:].strip() if sigil in "#^/&" else body
        if not name:
            raise TemplateSyntaxError("Empty tag name", start)

        if sigil in "#^":
            section = _Section(name, inverted=sigil == "^")
            current.append(section)
            stack.append((section, current, start))
            current = section.children
        elif sigil == "/":
            if not stack:
                raise TemplateSyntaxError(f"Unexpected closing tag '{name}'", start)
            section, parent, _ = stack.pop()
            if section.key != name:
                raise TemplateSyntaxError(
                    f"Closing tag '{name}' does not match section '{section.key}'",
                    start,
                )
            current = parent
        else:
            current.append(_Variable(name, raw))

    if stack:
        section, _, opened_at = stack[-1]
        raise TemplateSyntaxError(f"Unclosed section '{section.key}'", opened_at)

    return root


def render(template: str, context: Mapping[str, object]) -> str:
    """Render a prompt template against a context mapping."""
    return _render_nodes(parse(template), context)


def _render_nodes(nodes: list, context: Mapping[str, object]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, _Text):
            parts.append(node.text)
        elif isinstance(node, _Variable):
            if node.key in context:
                value = context[node.key]
                parts.append("" if value is None else str(value))
            else:
                parts.append(node.raw)
        elif bool(context.get(node.key)) != node.inverted:
            parts.append(_render_nodes(node.children, context))
    return "".join(parts)
