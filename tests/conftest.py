"""Pytest configuration and shared fixtures for the md2vdom test suite.

This module provides shared fixtures, test configuration, and the Hypothesis
profiles used by the property-based tests.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from md2vdom.ast import (
    Emphasis,
    Footnote,
    InlineCode,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "security: Sanitization and URL safety tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def emphasis_root() -> Root:
    """Provide the tree for ``_Emphasis_, **importance**, and `code`.``.

    Returns
    -------
    Root
        Source tree with one paragraph of mixed inline content.

    """
    return Root(
        children=[
            Paragraph(
                children=[
                    Emphasis(children=[Text(value="Emphasis")]),
                    Text(value=", "),
                    Strong(children=[Text(value="importance")]),
                    Text(value=", and "),
                    InlineCode(value="code"),
                    Text(value="."),
                ]
            )
        ]
    )


@pytest.fixture
def two_footnotes_root() -> Root:
    """Provide a paragraph with two inline footnotes."""
    return Root(
        children=[
            Paragraph(
                children=[
                    Text(value="Hello"),
                    Footnote(children=[Text(value="a")]),
                    Text(value=" and"),
                    Footnote(children=[Text(value="b")]),
                ]
            )
        ]
    )


@pytest.fixture
def aligned_table() -> Table:
    """Provide a two-column table aligned ``[left, None]`` with a header and one body row."""
    return Table(
        align=["left", None],
        children=[
            TableRow(children=[TableCell(children=[Text(value="a")]), TableCell(children=[Text(value="b")])]),
            TableRow(children=[TableCell(children=[Text(value="1")]), TableCell(children=[Text(value="2")])]),
        ],
    )
