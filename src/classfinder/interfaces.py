# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Contracts for the collaborators consumed by :class:`~classfinder.catalog.ClassCatalog`."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import Final, Protocol, runtime_checkable

STRUCTURAL_QUERIES: Final[frozenset[str]] = frozenset(
    {"is_instantiable", "is_trait", "is_interface", "is_subclass_of"},
)


@runtime_checkable
class ClassSource(Protocol):
    """Provide a snapshot mapping fully qualified class names to source paths."""

    @abstractmethod
    def class_map(self) -> Mapping[str, str]:
        """Return the current class map.

        Returns:
            Mapping[str, str]: Class names mapped to the file that defines them.
        """

        raise NotImplementedError("ClassSource.class_map must be implemented")


@runtime_checkable
class StructuralHandle(Protocol):
    """Answer the fixed set of structural questions asked by catalog filters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the fully qualified name of the inspected class.

        Returns:
            str: Dotted class name.
        """

        raise NotImplementedError("StructuralHandle.name must be implemented")

    @abstractmethod
    def is_instantiable(self) -> bool:
        """Return whether the class can be instantiated directly.

        Returns:
            bool: ``True`` for concrete classes.
        """

        raise NotImplementedError("StructuralHandle.is_instantiable must be implemented")

    @abstractmethod
    def is_trait(self) -> bool:
        """Return whether the class is a trait or mixin.

        Returns:
            bool: ``True`` for trait-like classes.
        """

        raise NotImplementedError("StructuralHandle.is_trait must be implemented")

    @abstractmethod
    def is_interface(self) -> bool:
        """Return whether the class is an interface.

        Returns:
            bool: ``True`` for interfaces.
        """

        raise NotImplementedError("StructuralHandle.is_interface must be implemented")

    @abstractmethod
    def is_subclass_of(self, other: str | type) -> bool:
        """Return whether the class derives from or realizes ``other``.

        Args:
            other: Base class or interface, either as a type or a dotted name.

        Returns:
            bool: ``True`` when ``other`` is a proper ancestor of the class.
        """

        raise NotImplementedError("StructuralHandle.is_subclass_of must be implemented")


@runtime_checkable
class Reflector(Protocol):
    """Build structural handles from class names."""

    @abstractmethod
    def __call__(self, class_name: str) -> StructuralHandle:
        """Return a handle describing ``class_name``.

        Args:
            class_name: Fully qualified class name.

        Returns:
            StructuralHandle: Handle for the resolved class.

        Raises:
            UnresolvableClassError: When the class cannot be resolved.
        """

        raise NotImplementedError("Reflector.__call__ must be implemented")


__all__ = ["STRUCTURAL_QUERIES", "ClassSource", "Reflector", "StructuralHandle"]
