#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/options/base.py
"""Shared scaffolding for option dataclasses.

Options are frozen so one instance can be shared by renderers on several
threads; :meth:`CloneFrozenMixin.create_updated` derives variants.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes support for frozen dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        ``__post_init__`` runs again on the copy, so the new values are
        validated like constructor arguments.

        Parameters
        ----------
        **kwargs : Any
            Field name to new value

        Returns
        -------
        Self
            The updated copy; ``self`` is left unchanged

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Common base of renderer option classes.

    Subclasses declare their settings as fields with
    ``metadata={"help": ..., "importance": ...}`` and check them in
    ``__post_init__``, calling ``super().__post_init__()`` first.
    """

    def __post_init__(self) -> None:
        """Hook for field validation; subclasses raise ``InvalidOptionsError``."""
