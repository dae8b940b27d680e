#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/ast/visitors.py
"""Double-dispatch base class for algorithms over source trees.

Every node class names one ``visit_*`` method in its ``accept``; a
:class:`NodeVisitor` subclass provides those methods and gets type dispatch
without ``isinstance`` ladders. The render-tree compiler is one such
subclass.

Discriminants without a node class arrive as :class:`~md2vdom.ast.nodes.Unknown`
and go to :meth:`NodeVisitor.visit_unknown`.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from md2vdom.ast.nodes import (
    HTML,
    BlockQuote,
    Break,
    Code,
    Definition,
    Delete,
    Emphasis,
    Footnote,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    ImageReference,
    InlineCode,
    Link,
    LinkReference,
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
    Unknown,
    Yaml,
)


class NodeVisitor(ABC):
    """Base class for source-tree visitors.

    Subclasses implement one method per node class; the return type is up to
    the algorithm (the compiler returns render nodes, a collector may return
    nothing at all). :meth:`dispatch` is a shorthand for ``node.accept(self)``.

    Examples
    --------
    A visitor that counts headings per depth:

        >>> from collections import Counter
        >>> class HeadingCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.depths = Counter()
        ...
        ...     def visit_heading(self, node):
        ...         self.depths[node.depth] += 1
        ...
        ...     def generic_visit(self, node):
        ...         for child in getattr(node, "children", None) or []:
        ...             self.dispatch(child)

    """

    def dispatch(self, node: Node) -> Any:
        """Send ``node`` to the ``visit_*`` method for its class."""
        return node.accept(self)

    # Document and blocks

    @abstractmethod
    def visit_root(self, node: Root) -> Any:
        """Visit the document root.

        Visitors that resolve references index the whole tree here, before
        any child is visited.
        """

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a list item; ``node.checked`` is None for non-task items."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a row reached outside of :meth:`visit_table`."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a cell reached outside of :meth:`visit_table`."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        pass

    @abstractmethod
    def visit_html(self, node: HTML) -> Any:
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        pass

    @abstractmethod
    def visit_definition(self, node: Definition) -> Any:
        pass

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        pass

    @abstractmethod
    def visit_yaml(self, node: Yaml) -> Any:
        pass

    # Inline content

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        pass

    @abstractmethod
    def visit_delete(self, node: Delete) -> Any:
        pass

    @abstractmethod
    def visit_inline_code(self, node: InlineCode) -> Any:
        pass

    @abstractmethod
    def visit_break(self, node: Break) -> Any:
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        pass

    @abstractmethod
    def visit_link_reference(self, node: LinkReference) -> Any:
        """Visit a link that names a definition instead of carrying a URL."""

    @abstractmethod
    def visit_image_reference(self, node: ImageReference) -> Any:
        pass

    @abstractmethod
    def visit_footnote(self, node: Footnote) -> Any:
        """Visit inline footnote shorthand, whose body is its children."""

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        pass

    # Fallbacks

    def visit_unknown(self, node: Unknown) -> Any:
        """Visit a node whose discriminant has no dedicated class.

        Parameters
        ----------
        node : Unknown
            Node carrying the raw ``type``, and ``children`` or ``value``

        Returns
        -------
        Any
            Whatever :meth:`generic_visit` returns

        """
        return self.generic_visit(node)

    def generic_visit(self, node: Node) -> Any:
        """Handle nodes no other method claims. Does nothing by default."""
        return None


__all__ = ["NodeVisitor"]
