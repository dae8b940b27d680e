#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/renderers/_resolver.py
"""Definition and footnote resolution for one compilation.

A document may use a reference before declaring its definition, so the
compiler indexes every definition and explicit footnote definition before it
compiles anything. The indices live on a :class:`CompileContext` that is
created for each compile call and discarded afterwards; nothing here is
process-wide.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Optional

from md2vdom.ast.nodes import Definition, FootnoteDefinition, Node, SourceLocation
from md2vdom.ast.utils import iter_nodes

if TYPE_CHECKING:
    from md2vdom.options.vdom import VdomRendererOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DefinitionEntry:
    """Resolved target of a link or image definition."""

    url: str
    title: Optional[str] = None


class DefinitionIndex:
    """Case-insensitive index of link/image definitions.

    Identifiers are upper-cased for indexing. When a document defines the
    same identifier twice, the later definition wins.

    Examples
    --------
    >>> from md2vdom.ast import Definition, Root
    >>> index = DefinitionIndex.from_tree(Root(children=[Definition(identifier="Foo", url="/a")]))
    >>> index.get("FOO").url
    '/a'

    """

    def __init__(self) -> None:
        self._entries: dict[str, DefinitionEntry] = {}

    @classmethod
    def from_tree(cls, root: Node) -> "DefinitionIndex":
        """Index every definition in the tree rooted at ``root``."""
        index = cls()
        for definition in iter_nodes(root, Definition):
            index.add(definition)
        return index

    def add(self, definition: Definition) -> None:
        self._entries[definition.identifier.upper()] = DefinitionEntry(url=definition.url, title=definition.title)

    def get(self, identifier: str) -> Optional[DefinitionEntry]:
        """Return the definition for ``identifier`` (any case), or None."""
        return self._entries.get(identifier.upper())

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class FootnoteEntry:
    """A footnote body to be listed in the footnotes section.

    Parameters
    ----------
    identifier : str
        Footnote identifier (numeric-looking, but any string)
    children : list of Node
        Footnote body
    source_location : SourceLocation or None, default = None
        Where the footnote was written

    """

    identifier: str
    children: list[Node] = field(default_factory=list)
    source_location: Optional[SourceLocation] = None


class FootnoteRegistry:
    """Ordered, append-only list of footnotes for one compilation.

    Explicit footnote definitions are registered up front in document order;
    inline footnotes are appended while compiling, each with the lowest
    positive integer identifier not yet taken.

    """

    def __init__(self) -> None:
        self._entries: list[FootnoteEntry] = []
        self._identifiers: set[str] = set()

    @classmethod
    def from_tree(cls, root: Node) -> "FootnoteRegistry":
        """Register every explicit footnote definition in the tree rooted at ``root``."""
        registry = cls()
        for definition in iter_nodes(root, FootnoteDefinition):
            registry.add(
                FootnoteEntry(
                    identifier=definition.identifier,
                    children=list(definition.children),
                    source_location=definition.source_location,
                )
            )
        return registry

    def add(self, entry: FootnoteEntry) -> FootnoteEntry:
        self._entries.append(entry)
        self._identifiers.add(entry.identifier)
        return entry

    def next_identifier(self) -> str:
        """Return the lowest positive integer, as a string, not yet used as an identifier."""
        candidate = 1
        while str(candidate) in self._identifiers:
            candidate += 1
        return str(candidate)

    def allocate(self, children: list[Node], source_location: Optional[SourceLocation] = None) -> FootnoteEntry:
        """Append a footnote for an inline footnote body and return it.

        Parameters
        ----------
        children : list of Node
            Footnote body
        source_location : SourceLocation or None, default = None
            Where the inline footnote was written

        Returns
        -------
        FootnoteEntry
            The new entry, with a freshly allocated identifier

        """
        identifier = self.next_identifier()
        logger.debug(f"Allocated footnote identifier '{identifier}' for inline footnote")
        return self.add(FootnoteEntry(identifier=identifier, children=list(children), source_location=source_location))

    def __getitem__(self, position: int) -> FootnoteEntry:
        return self._entries[position]

    def __iter__(self) -> Iterator[FootnoteEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class CompileContext:
    """Mutable state of one compilation.

    Parameters
    ----------
    options : VdomRendererOptions
        Options in effect for the call
    definitions : DefinitionIndex
        Definition index (empty until a root is indexed)
    footnotes : FootnoteRegistry
        Footnotes collected so far

    """

    options: "VdomRendererOptions"
    definitions: DefinitionIndex = field(default_factory=DefinitionIndex)
    footnotes: FootnoteRegistry = field(default_factory=FootnoteRegistry)

    def index(self, root: Node) -> None:
        """Rebuild both indices from the tree rooted at ``root``."""
        self.definitions = DefinitionIndex.from_tree(root)
        self.footnotes = FootnoteRegistry.from_tree(root)
        logger.debug(f"Indexed {len(self.definitions)} definition(s) and {len(self.footnotes)} footnote(s)")


__all__ = [
    "DefinitionEntry",
    "DefinitionIndex",
    "FootnoteEntry",
    "FootnoteRegistry",
    "CompileContext",
]
