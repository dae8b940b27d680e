#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/utils/html_sanitizer.py
"""Render-tree sanitization.

This module removes everything from a render tree that a :class:`Schema`
does not allow:

- elements whose tag is not allowed are unwrapped (their children stay)
- elements whose tag is in ``strip`` are removed together with their content
- attributes not allowed for the tag (or globally, under ``"*"``) are dropped
- URL attributes listed in ``protocols`` must be relative or use an allowed
  protocol; dangerous schemes (``javascript:`` and friends) are always dropped
- ``clobber`` attributes (``id``, ``name``) are prefixed so user content can
  never shadow page globals

:data:`DEFAULT_SCHEMA` follows GitHub's rules for rendered Markdown.

The input tree is never modified; sanitizing returns new nodes.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

from md2vdom.constants import DEFAULT_CLOBBER_PREFIX
from md2vdom.options.base import CloneFrozenMixin
from md2vdom.utils.security import get_url_protocol, is_url_scheme_dangerous
from md2vdom.vdom.nodes import Element, RenderNode, TextNode
from md2vdom.vdom.properties import get_property_info, kebab_case

logger = logging.getLogger(__name__)

# An allowed attribute: a name, or a name followed by the only values allowed.
# A compiled pattern among the values is matched against each space-separated
# token, and tokens that match nothing are dropped.
AttributeRule = Union[str, tuple[Any, ...]]

SanitizeResult = Union[RenderNode, list[RenderNode], None]


def html_attribute_name(name: str) -> str:
    """Return the lower-case HTML attribute name for any spelling of ``name``.

    Examples
    --------
    >>> html_attribute_name("className")
    'class'
    >>> html_attribute_name("ariaLabel")
    'aria-label'

    """
    info = get_property_info(name)
    if info is not None:
        return info.attribute
    return kebab_case(name)


def _normalize_rules(rules: Sequence[Any]) -> tuple[AttributeRule, ...]:
    normalized: list[AttributeRule] = []
    for rule in rules:
        if isinstance(rule, str):
            normalized.append(html_attribute_name(rule))
        else:
            name, *values = rule
            normalized.append((html_attribute_name(name), *values))
    return tuple(normalized)


@dataclass(frozen=True)
class Schema(CloneFrozenMixin):
    """Sanitization rule set.

    Every field defaults to "allow nothing"; :data:`DEFAULT_SCHEMA` is the
    permissive-but-safe baseline.

    Parameters
    ----------
    tag_names : frozenset of str, default empty
        Allowed tag names
    attributes : Mapping[str, tuple], default empty
        Tag name (or ``"*"`` for every tag) to allowed attributes. An entry is
        an attribute name, or a tuple of a name and its allowed values.
    protocols : Mapping[str, frozenset of str], default empty
        Attribute name to allowed URL protocols; relative URLs always pass
    ancestors : Mapping[str, frozenset of str], default empty
        Tag name to tags of which it must be a descendant
    strip : frozenset of str, default empty
        Tags removed together with their content
    clobber : frozenset of str, default empty
        Attributes whose values get ``clobber_prefix`` prepended
    clobber_prefix : str, default "user-content-"
        Prefix used for clobbered attributes

    """

    tag_names: frozenset[str] = frozenset()
    attributes: Mapping[str, tuple[AttributeRule, ...]] = field(default_factory=dict)
    protocols: Mapping[str, frozenset[str]] = field(default_factory=dict)
    ancestors: Mapping[str, frozenset[str]] = field(default_factory=dict)
    strip: frozenset[str] = frozenset()
    clobber: frozenset[str] = frozenset()
    clobber_prefix: str = DEFAULT_CLOBBER_PREFIX

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "Schema":
        """Build a schema from a plain mapping.

        Keys may be camelCase (``tagNames``, ``clobberPrefix``) or snake_case.
        Attribute and protocol names may use DOM or HTML spelling. Missing keys
        allow nothing.

        Parameters
        ----------
        mapping : Mapping
            Rule set, for example ``{"tagNames": ["p", "em"]}``

        Returns
        -------
        Schema
            The rule set

        Examples
        --------
        >>> Schema.from_mapping({"tagNames": ["p"], "attributes": {"*": ["className"]}}).attributes
        {'*': ('class',)}

        """

        def get(*names: str, default: Any = None) -> Any:
            for name in names:
                if name in mapping and mapping[name] is not None:
                    return mapping[name]
            return default

        return cls(
            tag_names=frozenset(tag.lower() for tag in get("tagNames", "tag_names", default=())),
            attributes={
                tag.lower() if tag != "*" else tag: _normalize_rules(rules)
                for tag, rules in get("attributes", default={}).items()
            },
            protocols={
                html_attribute_name(name): frozenset(protocol.lower() for protocol in protocols)
                for name, protocols in get("protocols", default={}).items()
            },
            ancestors={
                tag.lower(): frozenset(ancestor.lower() for ancestor in ancestors)
                for tag, ancestors in get("ancestors", default={}).items()
            },
            strip=frozenset(tag.lower() for tag in get("strip", default=())),
            clobber=frozenset(html_attribute_name(name) for name in get("clobber", default=())),
            clobber_prefix=get("clobberPrefix", "clobber_prefix", default=DEFAULT_CLOBBER_PREFIX),
        )


DEFAULT_SCHEMA = Schema.from_mapping(
    {
        "strip": ["script"],
        "clobberPrefix": DEFAULT_CLOBBER_PREFIX,
        "clobber": ["name", "id"],
        "ancestors": {
            "li": ["ol", "ul"],
            "tbody": ["table"],
            "tfoot": ["table"],
            "thead": ["table"],
            "td": ["table"],
            "th": ["table"],
            "tr": ["table"],
        },
        "protocols": {
            "href": ["http", "https", "mailto"],
            "cite": ["http", "https"],
            "src": ["http", "https"],
            "longDesc": ["http", "https"],
        },
        "tagNames": [
            "h1", "h2", "h3", "h4", "h5", "h6",
            "br", "b", "i", "strong", "em", "a", "pre", "code", "img", "tt", "div", "ins", "del",
            "sup", "sub", "p", "ol", "ul", "table", "thead", "tbody", "tfoot", "blockquote",
            "dl", "dt", "dd", "kbd", "q", "samp", "var", "hr", "ruby", "rt", "rp", "li", "tr",
            "td", "th", "s", "strike", "summary", "details", "caption", "figure", "figcaption",
            "abbr", "bdo", "cite", "dfn", "mark", "small", "span", "time", "wbr", "input",
        ],  # fmt: skip
        "attributes": {
            "a": ["href"],
            "img": ["src", "longDesc"],
            "code": [("className", re.compile(r"^language-."))],
            "input": [("type", "checkbox"), ("disabled", True)],
            "div": ["itemScope", "itemType"],
            "blockquote": ["cite"],
            "del": ["cite"],
            "ins": ["cite"],
            "q": ["cite"],
            "*": [
                "abbr", "accept", "acceptCharset", "accessKey", "action", "align", "alt",
                "ariaDescribedBy", "ariaHidden", "ariaLabel", "ariaLabelledBy", "axis", "border",
                "cellPadding", "cellSpacing", "char", "charOff", "charSet", "checked", "clear",
                "cols", "colSpan", "color", "compact", "coords", "dateTime", "dir", "disabled",
                "encType", "htmlFor", "frame", "headers", "height", "hrefLang", "hSpace", "isMap",
                "id", "label", "lang", "maxLength", "media", "method", "multiple", "name", "noHref",
                "noShade", "noWrap", "open", "prompt", "readOnly", "rel", "rev", "rows", "rowSpan",
                "rules", "scope", "selected", "shape", "size", "span", "start", "summary", "tabIndex",
                "target", "title", "type", "useMap", "vAlign", "value", "width",
            ],  # fmt: skip
        },
    }
)


def _is_tag_allowed(tag_name: str, ancestry: tuple[str, ...], schema: Schema) -> bool:
    if tag_name not in schema.tag_names:
        return False
    required = schema.ancestors.get(tag_name)
    if required is not None and not any(ancestor in required for ancestor in ancestry):
        return False
    return True


def _allowed_value(rule: AttributeRule, value: Any) -> Optional[Any]:
    """Return the part of ``value`` that ``rule`` allows, or None if nothing is left."""
    if isinstance(rule, str):
        return value
    allowed_values = rule[1:]
    if not allowed_values:
        return value

    patterns = [allowed for allowed in allowed_values if isinstance(allowed, re.Pattern)]
    if patterns and isinstance(value, (str, list, tuple)):
        tokens = value.split() if isinstance(value, str) else [str(token) for token in value]
        kept = [
            token
            for token in tokens
            if token in allowed_values or any(pattern.search(token) for pattern in patterns)
        ]
        if not kept:
            return None
        return " ".join(kept) if isinstance(value, str) else kept

    return value if value in allowed_values else None


def _find_rule(tag_name: str, attribute: str, schema: Schema) -> Optional[AttributeRule]:
    for rules in (schema.attributes.get(tag_name, ()), schema.attributes.get("*", ())):
        for rule in rules:
            rule_name = rule if isinstance(rule, str) else rule[0]
            if rule_name == attribute:
                return rule
    return None


def _is_url_allowed(attribute: str, value: Any, schema: Schema) -> bool:
    if not isinstance(value, str):
        return True
    if is_url_scheme_dangerous(value):
        return False
    protocols = schema.protocols.get(attribute)
    if protocols is None:
        return True
    protocol = get_url_protocol(value)
    return protocol is None or protocol in protocols


def sanitize_properties(tag_name: str, properties: Mapping[str, Any], schema: Schema) -> dict[str, Any]:
    """Return the properties of a ``tag_name`` element that ``schema`` allows.

    Parameters
    ----------
    tag_name : str
        Tag of the element the properties belong to
    properties : Mapping
        Canonical property name to value
    schema : Schema
        Rule set

    Returns
    -------
    dict
        Allowed properties, with clobbered values prefixed

    """
    result: dict[str, Any] = {}
    for name, value in properties.items():
        attribute = html_attribute_name(name)
        rule = _find_rule(tag_name, attribute, schema)

        allowed = _allowed_value(rule, value) if rule is not None else None
        if allowed is None:
            logger.debug(f"Dropping attribute '{attribute}' from <{tag_name}>")
            continue
        if allowed != value:
            logger.debug(f"Dropping disallowed '{attribute}' values from <{tag_name}>")
        value = allowed

        if attribute in ("href", "src", "cite", "longdesc", "action", "formaction") or attribute in schema.protocols:
            if not _is_url_allowed(attribute, value, schema):
                logger.debug(f"Dropping unsafe URL in '{attribute}' on <{tag_name}>")
                continue

        if attribute in schema.clobber and isinstance(value, str):
            value = schema.clobber_prefix + value

        result[name] = value
    return result


def _sanitize_node(node: RenderNode, schema: Schema, ancestry: tuple[str, ...]) -> SanitizeResult:
    if isinstance(node, TextNode):
        return TextNode(node.value)

    tag_name = node.tag_name.lower()

    if tag_name in schema.strip:
        logger.debug(f"Stripping <{tag_name}> and its content")
        return None

    allowed = _is_tag_allowed(tag_name, ancestry, schema)
    child_ancestry = ancestry + (tag_name,) if allowed else ancestry

    children: list[RenderNode] = []
    for child in node.children:
        result = _sanitize_node(child, schema, child_ancestry)
        if result is None:
            continue
        if isinstance(result, list):
            children.extend(result)
        else:
            children.append(result)

    if not allowed:
        logger.debug(f"Unwrapping disallowed <{tag_name}>")
        return children

    return Element(
        tag_name=node.tag_name,
        properties=sanitize_properties(tag_name, node.properties, schema),
        children=children,
        key=node.key,
    )


def sanitize(node: RenderNode, schema: Optional[Schema] = None) -> SanitizeResult:
    """Sanitize a render tree.

    Parameters
    ----------
    node : RenderNode
        Root of the tree to sanitize (not modified)
    schema : Schema or None, default None
        Rule set; defaults to :data:`DEFAULT_SCHEMA`

    Returns
    -------
    Element, TextNode, list of RenderNode, or None
        The sanitized node; a list when the root itself was unwrapped; None
        when it was stripped

    Examples
    --------
    >>> from md2vdom.vdom.nodes import Element, TextNode
    >>> tree = Element("div", children=[Element("em", children=[TextNode("hi")])])
    >>> sanitize(tree, Schema.from_mapping({"tagNames": []}))
    [TextNode(value='hi')]

    """
    return _sanitize_node(node, schema if schema is not None else DEFAULT_SCHEMA, ())


__all__ = [
    "AttributeRule",
    "Schema",
    "DEFAULT_SCHEMA",
    "html_attribute_name",
    "sanitize_properties",
    "sanitize",
]
