#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for attribute classification and property normalization."""

import pytest

from md2vdom.vdom.properties import (
    Placement,
    attribute_name,
    classify,
    get_property_info,
    kebab_case,
    normalize_properties,
    split_properties,
)


@pytest.mark.unit
class TestClassify:
    """Test the per-attribute classification rules."""

    def test_none_is_omitted(self) -> None:
        assert classify("title", None) is None
        assert classify("unknownThing", None) is None

    def test_download_true_is_bare_boolean(self) -> None:
        result = classify("download", True)
        assert result is not None
        assert result.name == "download"
        assert result.value is True

    def test_download_false_is_omitted(self) -> None:
        assert classify("download", False) is None

    def test_download_string_is_kept(self) -> None:
        result = classify("download", "song.mp3")
        assert result is not None
        assert result.value == "song.mp3"

    def test_download_empty_string_is_kept(self) -> None:
        """Overloaded booleans only drop an explicit False."""
        result = classify("download", "")
        assert result is not None
        assert result.value == ""

    def test_async_false_is_omitted(self) -> None:
        assert classify("async", False) is None

    @pytest.mark.parametrize("value", [False, 0, ""])
    def test_falsy_boolean_is_omitted(self, value) -> None:
        assert classify("checked", value) is None

    @pytest.mark.parametrize("value", [True, 1, "checked", "false"])
    def test_truthy_boolean_is_coerced_to_true(self, value) -> None:
        result = classify("checked", value)
        assert result is not None
        assert result.value is True

    def test_dom_name_is_canonical(self) -> None:
        assert classify("class", "a").name == "className"
        assert classify("for", "x").name == "htmlFor"
        assert classify("datetime", "2020").name == "dateTime"
        assert classify("ACCEPT-CHARSET", "utf-8").name == "acceptCharset"

    def test_unknown_name_is_kebab_cased(self) -> None:
        assert classify("dataFooBar", "x").name == "data-foo-bar"
        assert classify("ariaLabel", "x").name == "aria-label"

    def test_unknown_name_is_attribute(self) -> None:
        assert classify("dataFoo", "x").placement is Placement.ATTRIBUTE

    def test_attribute_only_property(self) -> None:
        assert classify("disabled", True).placement is Placement.ATTRIBUTE
        assert classify("role", "button").placement is Placement.ATTRIBUTE
        assert classify("width", 10).placement is Placement.ATTRIBUTE

    def test_dom_property(self) -> None:
        assert classify("href", "/").placement is Placement.PROPERTY
        assert classify("className", "a").placement is Placement.PROPERTY
        assert classify("checked", True).placement is Placement.PROPERTY

    def test_list_value_is_space_joined(self) -> None:
        assert classify("className", ["a", "b"]).value == "a b"

    def test_numeric_value_is_preserved(self) -> None:
        assert classify("start", 3).value == 3


@pytest.mark.unit
class TestPropertyLookup:
    """Test property table lookups and name conversions."""

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_property_info("CLASSNAME").name == "className"
        assert get_property_info("class").name == "className"

    def test_unknown_lookup(self) -> None:
        assert get_property_info("notAThing") is None

    def test_attribute_name(self) -> None:
        assert attribute_name("className") == "class"
        assert attribute_name("htmlFor") == "for"
        assert attribute_name("dateTime") == "datetime"
        assert attribute_name("data-foo") == "data-foo"

    @pytest.mark.parametrize(
        "name,expected",
        [("dataFooBar", "data-foo-bar"), ("data_foo", "data-foo"), ("aria-hidden", "aria-hidden"), ("x", "x")],
    )
    def test_kebab_case(self, name, expected) -> None:
        assert kebab_case(name) == expected


@pytest.mark.unit
class TestNormalizeProperties:
    """Test merging of attribute mappings."""

    def test_later_mapping_wins(self) -> None:
        assert normalize_properties({"className": "a"}, {"class": "b"}) == {"className": "b"}

    def test_none_override_removes_default(self) -> None:
        assert normalize_properties({"title": "x", "href": "/"}, {"title": None}) == {"href": "/"}

    def test_false_boolean_override_removes_default(self) -> None:
        assert normalize_properties({"checked": True}, {"checked": False}) == {}

    def test_none_mappings_are_skipped(self) -> None:
        assert normalize_properties(None, {"id": "x"}, None) == {"id": "x"}

    def test_order_of_first_appearance_is_kept(self) -> None:
        result = normalize_properties({"src": "a", "alt": "", "title": "t"})
        assert list(result) == ["src", "alt", "title"]


@pytest.mark.unit
class TestSplitProperties:
    """Test splitting canonical properties by placement."""

    def test_split(self) -> None:
        dom, attributes = split_properties(
            {"type": "checkbox", "checked": True, "disabled": True, "data-line": "3", "className": "x"}
        )
        assert dom == {"type": "checkbox", "checked": True, "className": "x"}
        assert attributes == {"disabled": True, "data-line": "3"}

    def test_attribute_names_use_html_spelling(self) -> None:
        _dom, attributes = split_properties({"dateTime": "2020-01-01", "longDesc": "/d"})
        assert attributes == {"datetime": "2020-01-01", "longdesc": "/d"}
