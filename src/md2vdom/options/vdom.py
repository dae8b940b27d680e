#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/options/vdom.py
"""Configuration options for compiling source trees into render trees.

This module defines the options for :class:`~md2vdom.renderers.vdom.VdomRenderer`:
sanitization, per-tag components, the low-level element factory and keying,
plus a few rendering details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from md2vdom.constants import (
    DEFAULT_FOOTNOTE_BACKREF_LABEL,
    DEFAULT_KEY_PREFIX,
    DEFAULT_SANITIZE,
    DEFAULT_TAB_SIZE,
)
from md2vdom.exceptions import InvalidOptionsError
from md2vdom.options.base import BaseRendererOptions

if TYPE_CHECKING:
    from md2vdom.utils.html_sanitizer import Schema

logger = logging.getLogger(__name__)

# Option names as spelled by JavaScript hosts -> field names
_SETTING_ALIASES: dict[str, str] = {
    "elementFactory": "element_factory",
    "h": "element_factory",
    "keyPrefix": "key_prefix",
    "prefix": "key_prefix",
    "tabSize": "tab_size",
    "unknownHandler": "unknown_handler",
    "footnoteBackrefLabel": "footnote_backref_label",
}


@dataclass(frozen=True)
class VdomRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a source tree to a render tree.

    Parameters
    ----------
    sanitize : bool, Schema or Mapping, default True
        Sanitization of the compiled tree:
        - True: sanitize with the default GitHub-style schema
        - False: do not sanitize
        - Schema or mapping: sanitize with a custom rule set. Mapping keys may
          be camelCase (``tagNames``) or snake_case (``tag_names``); rules
          absent from a custom mapping allow nothing.
    sanitizer : callable or None, default None
        Sanitizer implementation, ``sanitizer(element, schema)``, returning an
        element, a list of nodes, or None. Defaults to
        :func:`md2vdom.utils.html_sanitizer.sanitize`.
    components : Mapping[str, callable], default empty
        Lower-cased tag name to ``component(tag_name, props, children)``, used
        instead of the element factory for that tag. A component may return
        one node, a list of nodes, or None.
    element_factory : callable or None, default None
        Low-level constructor, ``factory(tag_name, props, children)``.
        Defaults to :func:`md2vdom.vdom.hyperscript.create_element`, which
        builds :class:`~md2vdom.vdom.nodes.Element` objects.
    key_prefix : str or None, default "h-"
        Prefix for the per-document element keys (``h-1``, ``h-2``...).
        None or an empty string disables keys.
    tab_size : int, default 4
        Tab stop width used when expanding tabs in code blocks.
    unknown_handler : callable or None, default None
        Fallback for nodes without a dedicated compiler,
        ``handler(node, compiler)``. Defaults to rendering a generic ``div``.
    footnote_backref_label : str, default "↩"
        Content of the link from a footnote back to its reference.

    """

    sanitize: Union[bool, "Schema", Mapping[str, Any]] = field(
        default=DEFAULT_SANITIZE,
        metadata={
            "help": "Sanitize output: True (default schema), False (off), or a custom schema",
            "importance": "security",
        },
    )
    sanitizer: Optional[Callable[..., Any]] = field(
        default=None,
        metadata={"help": "Custom sanitizer implementation, sanitizer(element, schema)", "importance": "advanced"},
    )
    components: Mapping[str, Callable[..., Any]] = field(
        default_factory=dict,
        metadata={
            "help": "Per-tag element constructors keyed by lower-cased tag name",
            "importance": "core",
        },
    )
    element_factory: Optional[Callable[..., Any]] = field(
        default=None,
        metadata={"help": "Low-level element constructor, factory(tag_name, props, children)", "importance": "core"},
    )
    key_prefix: Optional[str] = field(
        default=DEFAULT_KEY_PREFIX,
        metadata={"help": "Prefix for element keys; None or '' disables keys", "importance": "core"},
    )
    tab_size: int = field(
        default=DEFAULT_TAB_SIZE,
        metadata={"help": "Tab stop width for code blocks", "type": int, "importance": "advanced"},
    )
    unknown_handler: Optional[Callable[..., Any]] = field(
        default=None,
        metadata={"help": "Fallback compiler for unknown node types, handler(node, compiler)", "importance": "advanced"},
    )
    footnote_backref_label: str = field(
        default=DEFAULT_FOOTNOTE_BACKREF_LABEL,
        metadata={"help": "Content of footnote back-reference links", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        InvalidOptionsError
            If any field value is invalid.

        """
        super().__post_init__()

        from md2vdom.utils.html_sanitizer import Schema

        if not isinstance(self.sanitize, (bool, Schema, Mapping)):
            raise InvalidOptionsError(
                f"sanitize must be a bool, a Schema or a mapping, got {type(self.sanitize).__name__}",
                parameter_name="sanitize",
                parameter_value=self.sanitize,
            )

        if isinstance(self.tab_size, bool) or not isinstance(self.tab_size, int) or self.tab_size <= 0:
            raise InvalidOptionsError(
                f"tab_size must be a positive integer, got {self.tab_size!r}",
                parameter_name="tab_size",
                parameter_value=self.tab_size,
            )

        if not isinstance(self.components, Mapping):
            raise InvalidOptionsError(
                f"components must be a mapping, got {type(self.components).__name__}",
                parameter_name="components",
                parameter_value=self.components,
            )
        for name, component in self.components.items():
            if not callable(component):
                raise InvalidOptionsError(
                    f"Component for '{name}' is not callable",
                    parameter_name="components",
                    parameter_value=component,
                )

        for name in ("sanitizer", "element_factory", "unknown_handler"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise InvalidOptionsError(f"{name} must be callable", parameter_name=name, parameter_value=value)

        if self.key_prefix is not None and not isinstance(self.key_prefix, str):
            raise InvalidOptionsError(
                f"key_prefix must be a string or None, got {type(self.key_prefix).__name__}",
                parameter_name="key_prefix",
                parameter_value=self.key_prefix,
            )

    @property
    def schema(self) -> Optional["Schema"]:
        """Return the sanitization schema in effect, or None when sanitizing is off."""
        from md2vdom.utils.html_sanitizer import DEFAULT_SCHEMA, Schema

        if self.sanitize is False:
            return None
        if self.sanitize is True:
            return DEFAULT_SCHEMA
        if isinstance(self.sanitize, Schema):
            return self.sanitize
        return Schema.from_mapping(self.sanitize)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "VdomRendererOptions":
        """Build options from a settings mapping.

        Accepts field names and the camelCase names used by JavaScript hosts
        (``elementFactory``/``h``, ``keyPrefix``/``prefix``, ``tabSize``,
        ``unknownHandler``, ``footnoteBackrefLabel``). Unknown names are
        ignored.

        Parameters
        ----------
        settings : Mapping or None, default None
            Option names to values
        **kwargs : Any
            Additional options, applied after ``settings``

        Returns
        -------
        VdomRendererOptions
            New options instance

        """
        field_names = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}

        for name, value in {**(settings or {}), **kwargs}.items():
            field_name = _SETTING_ALIASES.get(name, name)
            if field_name not in field_names:
                logger.debug(f"Skipping unknown renderer option: {name}")
                continue
            values[field_name] = value

        return cls(**values)
