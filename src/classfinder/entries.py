# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tagged values stored against each catalog entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .interfaces import StructuralHandle


@dataclass(frozen=True, slots=True)
class Unreflected:
    """Entry value before reflection: the source path reported by the class source."""

    path: str


@dataclass(frozen=True, slots=True)
class Reflected:
    """Entry value after reflection: a structural handle for the class."""

    handle: StructuralHandle


EntryValue: TypeAlias = Unreflected | Reflected


def coerce_entry_value(value: str | StructuralHandle | EntryValue) -> EntryValue:
    """Wrap raw ``value`` into the matching entry variant.

    Args:
        value: Source path, structural handle, or an existing variant.

    Returns:
        EntryValue: ``Unreflected`` for paths, ``Reflected`` for handles.

    Raises:
        TypeError: If ``value`` is neither a path nor a structural handle.
    """

    if isinstance(value, (Unreflected, Reflected)):
        return value
    if isinstance(value, str):
        return Unreflected(value)
    if isinstance(value, StructuralHandle):
        return Reflected(value)
    raise TypeError(f"Unsupported catalog value: {value!r}")


__all__ = ["EntryValue", "Reflected", "Unreflected", "coerce_entry_value"]
