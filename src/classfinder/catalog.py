# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable, chainable catalog of discovered classes.

A catalog starts as a ``class name -> source path`` map and is narrowed in
stages: first by name prefix, then reflected so that only the surviving names
are imported and wrapped in structural handles, then filtered by structural
predicates. Every stage returns a new :class:`ClassCatalog`; earlier catalogs
remain valid and unchanged.

Example::

    handlers = ClassCatalog().namespace("app.handlers").implements("app.Handler").is_normal()
    for cls in handlers.classes():
        register(cls())
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Self

from .entries import EntryValue, Reflected, Unreflected, coerce_entry_value
from .errors import UnreflectedEntryError
from .interfaces import STRUCTURAL_QUERIES, ClassSource, Reflector, StructuralHandle
from .reflection import ClassReflector, ReflectedClass
from .sources import LoadedModuleClassSource

LOGGER = logging.getLogger(__name__)

EntryPredicate = Callable[[EntryValue, str], bool]
EntryTransform = Callable[[EntryValue, str], EntryValue]


class ClassCatalog(Mapping[str, EntryValue]):
    """Ordered, read-only mapping of class names to unreflected or reflected values."""

    __slots__ = ("_entries", "_reflector", "_source")

    def __init__(
        self,
        entries: Mapping[str, str | StructuralHandle | EntryValue] | None = None,
        *,
        source: ClassSource | None = None,
        reflector: Reflector | None = None,
    ) -> None:
        """Create a catalog from ``entries`` or from a fresh class-source scan.

        Args:
            entries: Explicit entries to use verbatim. When ``None`` the class
                source is queried once; an empty mapping yields an empty catalog.
            source: Class source consulted when ``entries`` is ``None``.
                Defaults to the classes of the currently loaded modules.
            reflector: Factory turning class names into structural handles.
                Defaults to :class:`~classfinder.reflection.ClassReflector`.
        """

        self._source: ClassSource = source if source is not None else LoadedModuleClassSource()
        self._reflector: Reflector = reflector if reflector is not None else ClassReflector()
        if entries is None:
            entries = self._source.class_map()
            LOGGER.debug("Class source reported %d classes", len(entries))
        self._entries: Mapping[str, EntryValue] = MappingProxyType(
            {name: coerce_entry_value(value) for name, value in entries.items()},
        )

    @property
    def source(self) -> ClassSource:
        """Return the class source shared by this catalog chain."""

        return self._source

    @property
    def reflector(self) -> Reflector:
        """Return the reflector shared by this catalog chain."""

        return self._reflector

    def __getitem__(self, name: str) -> EntryValue:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._entries)!r})"

    def _derive(self, entries: Mapping[str, EntryValue]) -> Self:
        return type(self)(entries, source=self._source, reflector=self._reflector)

    # Generic collection operations -------------------------------------------------

    def filter(self, predicate: EntryPredicate) -> Self:
        """Return a catalog keeping the entries for which ``predicate`` is true.

        Args:
            predicate: Callable receiving ``(value, name)``.

        Returns:
            Self: New catalog preserving the relative order of survivors.
        """

        return self._derive({name: value for name, value in self._entries.items() if predicate(value, name)})

    def map(self, transform: EntryTransform) -> Self:
        """Return a catalog whose values are replaced by ``transform``.

        The new mapping is built completely before the catalog is created, so
        an exception raised by ``transform`` leaves no partial result.

        Args:
            transform: Callable receiving ``(value, name)`` and returning the new value.

        Returns:
            Self: New catalog with the same names in the same order.
        """

        return self._derive({name: transform(value, name) for name, value in self._entries.items()})

    def names(self) -> tuple[str, ...]:
        """Return the class names in catalog order."""

        return tuple(self._entries)

    def handles(self) -> tuple[StructuralHandle, ...]:
        """Return the structural handles in catalog order.

        Returns:
            tuple[StructuralHandle, ...]: Handle of every entry.

        Raises:
            UnreflectedEntryError: If any entry has not been reflected.
        """

        return tuple(_require_handle(name, value, "handles") for name, value in self._entries.items())

    def classes(self) -> tuple[type, ...]:
        """Return the reflected Python classes in catalog order.

        Returns:
            tuple[type, ...]: Class objects ready to instantiate or register.

        Raises:
            UnreflectedEntryError: If any entry has not been reflected.
            TypeError: If a handle does not wrap a Python class.
        """

        classes: list[type] = []
        for handle in self.handles():
            if not isinstance(handle, ReflectedClass):
                raise TypeError(f"Handle for {handle.name!r} does not expose a Python class")
            classes.append(handle.cls)
        return tuple(classes)

    # Discovery pipeline ------------------------------------------------------------

    def namespace(self, prefix: str, should_reflect: bool = True) -> Self:
        """Keep classes whose name starts with ``prefix``, then reflect them.

        The test is a literal, case-sensitive string prefix: ``"app.User"``
        also matches ``"app.UserProfile"``.

        Args:
            prefix: Leading characters of the class names to keep.
            should_reflect: When ``False`` the narrowed catalog keeps its paths.

        Returns:
            Self: Narrowed (and by default reflected) catalog.

        Raises:
            UnresolvableClassError: If reflection fails for a surviving class.
        """

        narrowed = self.filter(lambda _value, name: name.startswith(prefix))
        LOGGER.debug("Namespace %r kept %d of %d classes", prefix, len(narrowed), len(self))
        return narrowed.reflect(should_reflect)

    def reflect(self, should_reflect: bool = True) -> Self:
        """Replace every source path with a structural handle for its class.

        Args:
            should_reflect: When ``False`` the receiver is returned unchanged.

        Returns:
            Self: Catalog whose entries are all reflected.

        Raises:
            UnresolvableClassError: If any class cannot be resolved; no catalog
                is produced in that case.
        """

        if not should_reflect:
            return self
        return self.map(self._reflect_value)

    def _reflect_value(self, value: EntryValue, name: str) -> EntryValue:
        if isinstance(value, Reflected):
            return value
        return Reflected(self._reflector(name))

    def quick_filter(self, query: str, *args: object) -> Self:
        """Keep entries whose handle answers ``True`` to the structural ``query``.

        Args:
            query: One of ``is_instantiable``, ``is_trait``, ``is_interface``
                or ``is_subclass_of``.
            *args: Arguments forwarded to the query.

        Returns:
            Self: Filtered catalog.

        Raises:
            ValueError: If ``query`` is not a structural query.
            UnreflectedEntryError: If an entry has not been reflected.
        """

        if query not in STRUCTURAL_QUERIES:
            raise ValueError(f"Unknown structural query {query!r}; expected one of {sorted(STRUCTURAL_QUERIES)}")

        def matches(value: EntryValue, name: str) -> bool:
            handle = _require_handle(name, value, query)
            return bool(getattr(handle, query)(*args))

        return self.filter(matches)

    def is_subclass_of(self, base: str | type) -> Self:
        """Keep classes deriving from or realizing ``base``, excluding ``base`` itself."""

        return self.quick_filter("is_subclass_of", base)

    def extends(self, base: str | type) -> Self:
        """Alias of :meth:`is_subclass_of` for base classes."""

        return self.is_subclass_of(base)

    def implements(self, interface: str | type) -> Self:
        """Alias of :meth:`is_subclass_of` for interfaces."""

        return self.is_subclass_of(interface)

    def is_normal(self) -> Self:
        """Keep concretely instantiable classes."""

        return self.quick_filter("is_instantiable")

    def is_trait(self) -> Self:
        """Keep traits and mixins."""

        return self.quick_filter("is_trait")

    def is_interface(self) -> Self:
        """Keep interfaces."""

        return self.quick_filter("is_interface")


def _require_handle(name: str, value: EntryValue, query: str) -> StructuralHandle:
    if isinstance(value, Unreflected):
        raise UnreflectedEntryError(name, query)
    return value.handle


__all__ = ["ClassCatalog", "EntryPredicate", "EntryTransform"]
