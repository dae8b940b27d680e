#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/properties.py
"""Attribute Mapper: classification of element attributes.

Every attribute that reaches the render tree passes through :func:`classify`,
which decides whether it is emitted at all, under which canonical name, with
which value, and whether a DOM backend should set it as a DOM property or as a
plain HTML attribute.

The property table follows the browser conventions virtual-DOM libraries are
built around: ``class`` is the ``className`` property, ``for`` is
``htmlFor``, ``async``/``checked``/``disabled`` are booleans, ``download`` is
an "overloaded boolean" that may also hold a file name, and a handful of
names (``disabled``, ``role``, ``width``...) must always be set as attributes.

Rules, in order:

1. A ``None`` value is omitted.
2. A falsy value on a boolean property is omitted; ``False`` on an
   overloaded boolean is omitted.
3. The canonical name is the table's DOM property name, else the kebab-cased
   name.
4. Boolean properties that survive are coerced to ``True``.
5. Placement is ``ATTRIBUTE`` when the table marks the name attribute-only or
   does not know it; otherwise ``PROPERTY``.

Examples
--------
    >>> classify("download", True)
    ClassifiedProperty(placement=<Placement.PROPERTY: 'property'>, name='download', value=True)
    >>> classify("download", False) is None
    True
    >>> classify("class", "foo").name
    'className'
    >>> classify("dataFooBar", "x").name
    'data-foo-bar'

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntFlag
from typing import Any, Mapping, NamedTuple


class PropertyFlag(IntFlag):
    """Behaviour flags for a known property."""

    NONE = 0
    MUST_USE_ATTRIBUTE = 1
    MUST_USE_PROPERTY = 2
    BOOLEAN = 4
    OVERLOADED_BOOLEAN = 8


class Placement(str, Enum):
    """Where a classified attribute ends up on a DOM element."""

    PROPERTY = "property"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True)
class PropertyInfo:
    """Static information about one known property.

    Parameters
    ----------
    name : str
        DOM property name (``className``, ``htmlFor``, ``dateTime``)
    attribute : str
        HTML attribute name (``class``, ``for``, ``datetime``)
    flags : PropertyFlag
        Behaviour flags

    """

    name: str
    attribute: str
    flags: PropertyFlag = PropertyFlag.NONE

    @property
    def boolean(self) -> bool:
        return bool(self.flags & PropertyFlag.BOOLEAN)

    @property
    def overloaded_boolean(self) -> bool:
        return bool(self.flags & PropertyFlag.OVERLOADED_BOOLEAN)

    @property
    def must_use_attribute(self) -> bool:
        return bool(self.flags & PropertyFlag.MUST_USE_ATTRIBUTE)


class ClassifiedProperty(NamedTuple):
    """Outcome of :func:`classify` for an attribute that is kept."""

    placement: Placement
    name: str
    value: Any


_A = PropertyFlag.MUST_USE_ATTRIBUTE
_P = PropertyFlag.MUST_USE_PROPERTY
_B = PropertyFlag.BOOLEAN
_OB = PropertyFlag.OVERLOADED_BOOLEAN
_NONE = PropertyFlag.NONE

_PROPERTY_FLAGS: dict[str, PropertyFlag] = {
    # Standard properties
    "abbr": _NONE,
    "accept": _NONE,
    "acceptCharset": _NONE,
    "accessKey": _NONE,
    "action": _NONE,
    "allowFullScreen": _A | _B,
    "allowTransparency": _A,
    "alt": _NONE,
    "async": _B,
    "autoComplete": _NONE,
    "autoFocus": _B,
    "autoPlay": _B,
    "capture": _A | _B,
    "cellPadding": _NONE,
    "cellSpacing": _NONE,
    "charSet": _A,
    "challenge": _A,
    "checked": _P | _B,
    "cite": _NONE,
    "classID": _A,
    "className": _NONE,
    "cols": _A,
    "colSpan": _NONE,
    "content": _NONE,
    "contentEditable": _NONE,
    "contextMenu": _A,
    "controls": _P | _B,
    "coords": _NONE,
    "crossOrigin": _NONE,
    "data": _NONE,
    "dateTime": _A,
    "default": _B,
    "defer": _B,
    "dir": _NONE,
    "disabled": _A | _B,
    "download": _OB,
    "draggable": _NONE,
    "encType": _NONE,
    "form": _A,
    "formAction": _A,
    "formEncType": _A,
    "formMethod": _A,
    "formNoValidate": _B,
    "formTarget": _A,
    "frameBorder": _A,
    "headers": _NONE,
    "height": _A,
    "hidden": _A | _B,
    "high": _NONE,
    "href": _NONE,
    "hrefLang": _NONE,
    "htmlFor": _NONE,
    "httpEquiv": _NONE,
    "icon": _NONE,
    "id": _P,
    "inputMode": _A,
    "integrity": _NONE,
    "is": _A,
    "keyParams": _A,
    "keyType": _A,
    "kind": _NONE,
    "label": _NONE,
    "lang": _NONE,
    "list": _A,
    "loop": _P | _B,
    "low": _NONE,
    "manifest": _A,
    "marginHeight": _NONE,
    "marginWidth": _NONE,
    "max": _NONE,
    "maxLength": _A,
    "media": _A,
    "mediaGroup": _NONE,
    "method": _NONE,
    "min": _NONE,
    "minLength": _A,
    "multiple": _P | _B,
    "muted": _P | _B,
    "name": _NONE,
    "nonce": _A,
    "noValidate": _B,
    "open": _B,
    "optimum": _NONE,
    "pattern": _NONE,
    "placeholder": _NONE,
    "poster": _NONE,
    "preload": _NONE,
    "radioGroup": _NONE,
    "readOnly": _P | _B,
    "rel": _NONE,
    "required": _B,
    "reversed": _B,
    "role": _A,
    "rows": _A,
    "rowSpan": _NONE,
    "sandbox": _NONE,
    "scope": _NONE,
    "scoped": _B,
    "scrolling": _NONE,
    "seamless": _A | _B,
    "selected": _P | _B,
    "shape": _NONE,
    "size": _A,
    "sizes": _A,
    "span": _NONE,
    "spellCheck": _NONE,
    "src": _NONE,
    "srcDoc": _P,
    "srcLang": _NONE,
    "srcSet": _A,
    "start": _NONE,
    "step": _NONE,
    "style": _NONE,
    "summary": _NONE,
    "tabIndex": _NONE,
    "target": _NONE,
    "title": _NONE,
    "type": _NONE,
    "useMap": _NONE,
    "value": _P,
    "width": _A,
    "wmode": _A,
    "wrap": _NONE,
    # Legacy presentational attributes still produced by Markdown
    "align": _NONE,
    "longDesc": _A,
    "noWrap": _A | _B,
    # RDFa
    "about": _A,
    "datatype": _A,
    "inlist": _A,
    "prefix": _A,
    "property": _A,
    "resource": _A,
    "typeof": _A,
    "vocab": _A,
    # Non-standard
    "autoCapitalize": _NONE,
    "autoCorrect": _NONE,
    "autoSave": _NONE,
    "color": _NONE,
    "itemProp": _A,
    "itemScope": _A | _B,
    "itemType": _A,
    "itemID": _A,
    "itemRef": _A,
    "results": _NONE,
    "security": _A,
    "unselectable": _A,
}

# DOM property names whose HTML attribute is not simply the lower-cased name
_ATTRIBUTE_NAMES: dict[str, str] = {
    "acceptCharset": "accept-charset",
    "className": "class",
    "htmlFor": "for",
    "httpEquiv": "http-equiv",
}


def _build_table() -> dict[str, PropertyInfo]:
    """Index every known property by lower-cased DOM name and attribute name."""
    table: dict[str, PropertyInfo] = {}
    for name, flags in _PROPERTY_FLAGS.items():
        info = PropertyInfo(name=name, attribute=_ATTRIBUTE_NAMES.get(name, name.lower()), flags=flags)
        table[name.lower()] = info
        table[info.attribute] = info
    return table


PROPERTY_TABLE: dict[str, PropertyInfo] = _build_table()

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def kebab_case(name: str) -> str:
    """Convert ``name`` to kebab case (``dataFooBar`` -> ``data-foo-bar``).

    Examples
    --------
    >>> kebab_case("ariaLabel")
    'aria-label'
    >>> kebab_case("data_foo")
    'data-foo'

    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1-\2", name).lower()
    return _NON_ALPHANUMERIC.sub("-", spaced).strip("-")


def get_property_info(name: str) -> PropertyInfo | None:
    """Look up a property by DOM name or HTML attribute name, case-insensitively."""
    return PROPERTY_TABLE.get(name.lower())


def classify(name: str, value: Any) -> ClassifiedProperty | None:
    """Classify one attribute.

    Parameters
    ----------
    name : str
        Attribute name as supplied (DOM name, HTML name, or anything else)
    value : Any
        Attribute value; ``None`` means absent

    Returns
    -------
    ClassifiedProperty or None
        ``None`` when the attribute contributes nothing to the output

    """
    if value is None:
        return None

    info = get_property_info(name)
    if info is not None:
        if info.boolean and not value:
            return None
        if info.overloaded_boolean and value is False:
            return None

    canonical = info.name if info is not None else kebab_case(name)

    if info is not None and info.boolean:
        value = True
    elif isinstance(value, (list, tuple)):
        value = " ".join(str(part) for part in value)

    if info is None or info.must_use_attribute:
        placement = Placement.ATTRIBUTE
    else:
        placement = Placement.PROPERTY

    return ClassifiedProperty(placement, canonical, value)


def normalize_properties(*mappings: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge attribute mappings left to right and canonicalize the result.

    Later mappings win when two names resolve to the same canonical name
    (``{"className": "a"}`` followed by ``{"class": "b"}`` gives ``"b"``).
    Omitted attributes are removed, including ones that override an earlier
    value with ``None``.

    Parameters
    ----------
    *mappings : Mapping or None
        Attribute mappings, lowest priority first

    Returns
    -------
    dict
        Canonical name to final value

    """
    result: dict[str, Any] = {}
    for mapping in mappings:
        if not mapping:
            continue
        for name, value in mapping.items():
            classified = classify(name, value)
            if classified is None:
                info = get_property_info(name)
                result.pop(info.name if info is not None else kebab_case(name), None)
                continue
            result[classified.name] = classified.value
    return result


def attribute_name(name: str) -> str:
    """Return the HTML attribute name for a canonical property name."""
    info = get_property_info(name)
    return info.attribute if info is not None else name


def split_properties(properties: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split canonical properties into DOM properties and HTML attributes.

    Parameters
    ----------
    properties : Mapping
        Canonical name to value, as stored on an :class:`~md2vdom.vdom.nodes.Element`

    Returns
    -------
    tuple of (dict, dict)
        DOM properties keyed by DOM name, and HTML attributes keyed by
        attribute name

    """
    dom_properties: dict[str, Any] = {}
    attributes: dict[str, Any] = {}
    for name, value in properties.items():
        classified = classify(name, value)
        if classified is None:
            continue
        if classified.placement is Placement.ATTRIBUTE:
            attributes[attribute_name(classified.name)] = classified.value
        else:
            dom_properties[classified.name] = classified.value
    return dom_properties, attributes


__all__ = [
    "PropertyFlag",
    "Placement",
    "PropertyInfo",
    "ClassifiedProperty",
    "PROPERTY_TABLE",
    "kebab_case",
    "get_property_info",
    "classify",
    "normalize_properties",
    "attribute_name",
    "split_properties",
]
