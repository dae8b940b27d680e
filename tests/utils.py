"""Test utilities for the md2vdom test suite.

This module turns Markdown text into md2vdom source trees with mistune, so
tests can be written against real Markdown instead of hand-built trees, and
provides small helpers for inspecting render trees.

Only the constructs the tests use are mapped; mistune resolves reference
links itself, so definitions never reach the source tree this way.
"""

from typing import Any

import mistune

from md2vdom.ast import (
    HTML,
    BlockQuote,
    Break,
    Code,
    Delete,
    Emphasis,
    Heading,
    Image,
    InlineCode,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from md2vdom.vdom import Element, TextNode

DEFAULT_PLUGINS = ("strikethrough", "table", "task_lists")


def _attrs(token: dict[str, Any]) -> dict[str, Any]:
    attrs = token.get("attrs", {})
    return attrs if isinstance(attrs, dict) else {}


def _inline(tokens: list[dict[str, Any]]) -> list[Node]:
    nodes: list[Node] = []
    for token in tokens:
        token_type = token.get("type", "")
        children = token.get("children", [])
        if token_type == "text":
            nodes.append(Text(value=token.get("raw", "")))
        elif token_type == "softbreak":
            nodes.append(Text(value="\n"))
        elif token_type == "linebreak":
            nodes.append(Break())
        elif token_type == "emphasis":
            nodes.append(Emphasis(children=_inline(children)))
        elif token_type == "strong":
            nodes.append(Strong(children=_inline(children)))
        elif token_type == "strikethrough":
            nodes.append(Delete(children=_inline(children)))
        elif token_type == "codespan":
            nodes.append(InlineCode(value=token.get("raw", "")))
        elif token_type == "inline_html":
            nodes.append(HTML(value=token.get("raw", "")))
        elif token_type == "link":
            attrs = _attrs(token)
            nodes.append(Link(url=attrs.get("url", ""), title=attrs.get("title"), children=_inline(children)))
        elif token_type == "image":
            attrs = _attrs(token)
            alt = "".join(child.get("raw", "") for child in children if child.get("type") == "text")
            nodes.append(Image(url=attrs.get("url", ""), title=attrs.get("title"), alt=alt))
        else:
            raise AssertionError(f"Unhandled inline token in test helper: {token_type}")
    return nodes


def _list_item(token: dict[str, Any]) -> ListItem:
    checked = _attrs(token).get("checked") if token.get("type") == "task_list_item" else None
    return ListItem(children=_blocks(token.get("children", [])), checked=checked)


def _table(token: dict[str, Any]) -> Table:
    align: list[Any] = []
    rows: list[Node] = []
    for section in token.get("children", []):
        if section.get("type") == "table_head":
            cells = section.get("children", [])
            align = [_attrs(cell).get("align") for cell in cells]
            rows.append(TableRow(children=[TableCell(children=_inline(cell.get("children", []))) for cell in cells]))
        elif section.get("type") == "table_body":
            for row in section.get("children", []):
                rows.append(
                    TableRow(
                        children=[TableCell(children=_inline(cell.get("children", []))) for cell in row["children"]]
                    )
                )
    return Table(align=align, children=rows)


def _blocks(tokens: list[dict[str, Any]]) -> list[Node]:
    nodes: list[Node] = []
    for token in tokens:
        token_type = token.get("type", "")
        children = token.get("children", [])
        if token_type == "blank_line":
            continue
        if token_type in ("paragraph", "block_text"):
            nodes.append(Paragraph(children=_inline(children)))
        elif token_type == "heading":
            nodes.append(Heading(depth=_attrs(token).get("level", 1), children=_inline(children)))
        elif token_type == "block_code":
            raw = token.get("raw", "")
            info = _attrs(token).get("info") or None
            lang, _, meta = (info or "").partition(" ")
            nodes.append(Code(value=raw[:-1] if raw.endswith("\n") else raw, lang=lang or None, meta=meta or None))
        elif token_type == "block_quote":
            nodes.append(BlockQuote(children=_blocks(children)))
        elif token_type == "list":
            attrs = _attrs(token)
            tight = token.get("tight", attrs.get("tight", True))
            nodes.append(
                List(
                    ordered=bool(attrs.get("ordered", False)),
                    start=attrs.get("start", 1) if attrs.get("ordered") else None,
                    loose=not tight,
                    children=[_list_item(item) for item in children],
                )
            )
        elif token_type == "thematic_break":
            nodes.append(ThematicBreak())
        elif token_type == "block_html":
            nodes.append(HTML(value=token.get("raw", "").rstrip("\n")))
        elif token_type == "table":
            nodes.append(_table(token))
        else:
            raise AssertionError(f"Unhandled block token in test helper: {token_type}")
    return nodes


def parse_markdown(text: str, plugins: tuple[str, ...] = DEFAULT_PLUGINS) -> Root:
    """Parse Markdown into a source tree.

    Parameters
    ----------
    text : str
        Markdown source
    plugins : tuple of str
        mistune plugins to enable

    Returns
    -------
    Root
        Source tree

    """
    markdown = mistune.create_markdown(plugins=list(plugins), renderer=None)
    tokens, _state = markdown.parse(text)
    return Root(children=_blocks(tokens))


def find_elements(node: Any, tag_name: str) -> list[Element]:
    """Return every element with ``tag_name`` in a render tree, in document order."""
    found: list[Element] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, Element):
            if current.tag_name == tag_name:
                found.append(current)
            stack.extend(reversed(current.children))
    return found


def collect_keys(node: Element) -> list[str]:
    """Return the keys of every element in a materialized tree, in document order."""
    keys = [node.key] if node.key is not None else []
    for child in node.children:
        if isinstance(child, Element):
            keys.extend(collect_keys(child))
    return keys


def texts(nodes: list[Any]) -> list[str]:
    """Return text node values, and tag names for elements, for a flat node list."""
    return [node.value if isinstance(node, TextNode) else node.tag_name for node in nodes]
