# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Structural inspection of Python classes.

Python has no native notion of traits or interfaces, so this module maps the
conventional equivalents onto the :class:`~classfinder.interfaces.StructuralHandle`
contract:

* interfaces are :class:`typing.Protocol` classes, or abstract classes whose own
  public callables are all abstract and whose bases are themselves interfaces;
* traits are mixins, recognised by a configurable name suffix or an explicit
  ``__trait__ = True`` class attribute;
* instantiable classes are everything that is neither abstract, an interface,
  nor a trait.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from abc import ABC, ABCMeta
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Final, Generic, Literal

from .errors import UnresolvableClassError

LOGGER = logging.getLogger(__name__)

DEFAULT_TRAIT_SUFFIXES: Final[tuple[str, ...]] = ("Mixin",)
TRAIT_MARKER: Final[str] = "__trait__"

ClassKind = Literal["interface", "trait", "abstract", "class"]

_INTERFACE_ROOTS: Final[tuple[type, ...]] = (object, ABC, Generic)


def _import_object(name: str) -> object:
    """Import the longest module prefix of ``name`` and walk the remaining attributes."""

    if ":" in name:
        module_path, _, qualname = name.partition(":")
        target: object = importlib.import_module(module_path)
        attributes = qualname.split(".") if qualname else []
    else:
        attributes = name.split(".")
        module_path = attributes.pop(0)
        target = importlib.import_module(module_path)
        while attributes:
            candidate = f"{module_path}.{attributes[0]}"
            try:
                target = importlib.import_module(candidate)
            except ModuleNotFoundError as exc:
                if exc.name != candidate:
                    raise
                break
            module_path = candidate
            attributes.pop(0)
    for attribute in attributes:
        target = getattr(target, attribute)
    return target


def resolve_class(name: str) -> type:
    """Import and return the class identified by ``name``.

    Both ``package.module.Outer.Inner`` and ``package.module:Outer.Inner`` forms
    are accepted. Errors raised while a module executes are reported as such
    rather than as a missing attribute.

    Args:
        name: Fully qualified class name.

    Returns:
        type: The resolved class object.

    Raises:
        UnresolvableClassError: If importing fails for any reason or the name
            does not refer to a class.
    """

    try:
        resolved = _import_object(name)
    except Exception as exc:  # noqa: BLE001 - importing runs arbitrary module code
        raise UnresolvableClassError(name, f"{type(exc).__name__}: {exc}") from exc
    if not isinstance(resolved, type):
        raise UnresolvableClassError(name, f"resolved to {type(resolved).__name__}, not a class")
    return resolved


def is_protocol_class(cls: type) -> bool:
    """Return whether ``cls`` is itself a :class:`typing.Protocol` definition."""

    return bool(getattr(cls, "_is_protocol", False))


def is_interface_class(cls: type) -> bool:
    """Return whether ``cls`` is a protocol or a purely abstract class.

    Args:
        cls: Class to inspect.

    Returns:
        bool: ``True`` when ``cls`` declares behaviour without implementing it.
    """

    if is_protocol_class(cls):
        return True
    if not getattr(cls, "__abstractmethods__", None):
        return False
    for base in cls.__bases__:
        if base in _INTERFACE_ROOTS:
            continue
        if not is_interface_class(base):
            return False
    for attr, member in vars(cls).items():
        if attr.startswith("_") or isinstance(member, type):
            continue
        if not (callable(member) or isinstance(member, (property, classmethod, staticmethod))):
            continue
        if not getattr(member, "__isabstractmethod__", False):
            return False
    return True


@dataclass(frozen=True, slots=True)
class ReflectedClass:
    """Structural handle wrapping a resolved Python class."""

    cls: type
    class_name: str = ""
    trait_suffixes: tuple[str, ...] = field(default=DEFAULT_TRAIT_SUFFIXES)

    @property
    def name(self) -> str:
        """Return the catalog name of the class, defaulting to its import path.

        Returns:
            str: Fully qualified class name.
        """

        return self.class_name or f"{self.cls.__module__}.{self.cls.__qualname__}"

    def is_interface(self) -> bool:
        """Return whether the wrapped class is an interface."""

        return is_interface_class(self.cls)

    def is_trait(self) -> bool:
        """Return whether the wrapped class is a trait or mixin."""

        if self.is_interface():
            return False
        if self.cls.__dict__.get(TRAIT_MARKER) is True:
            return True
        return any(self.cls.__name__.endswith(suffix) for suffix in self.trait_suffixes)

    def is_abstract(self) -> bool:
        """Return whether the wrapped class still has unimplemented abstract members."""

        return inspect.isabstract(self.cls)

    def is_instantiable(self) -> bool:
        """Return whether the wrapped class is a concrete, directly usable class."""

        return not (self.is_abstract() or self.is_interface() or self.is_trait())

    def is_subclass_of(self, other: str | type) -> bool:
        """Return whether the wrapped class derives from or realizes ``other``.

        Nominal inheritance and ABC virtual registration count. Structural
        conformance does not: neither protocol matching nor an ABC whose
        ``__subclasshook__`` accepts the class by its methods alone. A class is
        never a subclass of itself here.

        Args:
            other: Base class or interface, as a type or a dotted name.

        Returns:
            bool: ``True`` when ``other`` is a proper ancestor.

        Raises:
            UnresolvableClassError: If ``other`` is a name that cannot be resolved.
        """

        target = other if isinstance(other, type) else resolve_class(other)
        if target is self.cls:
            return False
        if target in self.cls.__mro__[1:]:
            return True
        if isinstance(target, ABCMeta) and not is_protocol_class(target):
            # Only the register() registry may decide; the hook answers by shape.
            return target.__subclasshook__(self.cls) is NotImplemented and issubclass(self.cls, target)
        return False

    @property
    def kind(self) -> ClassKind:
        """Return a single label describing the structural category.

        Returns:
            ClassKind: ``interface``, ``trait``, ``abstract`` or ``class``.
        """

        if self.is_interface():
            return "interface"
        if self.is_trait():
            return "trait"
        if self.is_abstract():
            return "abstract"
        return "class"

    @property
    def source_file(self) -> str | None:
        """Return the file defining the class when it can be determined."""

        try:
            return inspect.getsourcefile(self.cls)
        except TypeError:
            return None


class ClassReflector:
    """Default reflector resolving names through the import system."""

    def __init__(self, trait_suffixes: Sequence[str] = DEFAULT_TRAIT_SUFFIXES) -> None:
        """Create a reflector recognising traits by ``trait_suffixes``.

        Args:
            trait_suffixes: Class-name suffixes that mark a class as a trait.
        """

        self._trait_suffixes = tuple(trait_suffixes)

    @property
    def trait_suffixes(self) -> tuple[str, ...]:
        """Return the configured trait suffixes."""

        return self._trait_suffixes

    def __call__(self, class_name: str) -> ReflectedClass:
        """Resolve ``class_name`` and wrap it in a :class:`ReflectedClass`.

        Args:
            class_name: Fully qualified class name.

        Returns:
            ReflectedClass: Structural handle for the class.

        Raises:
            UnresolvableClassError: If the class cannot be resolved.
        """

        LOGGER.debug("Reflecting %s", class_name)
        return ReflectedClass(
            resolve_class(class_name),
            class_name=class_name,
            trait_suffixes=self._trait_suffixes,
        )


__all__ = [
    "DEFAULT_TRAIT_SUFFIXES",
    "TRAIT_MARKER",
    "ClassKind",
    "ClassReflector",
    "ReflectedClass",
    "is_interface_class",
    "is_protocol_class",
    "resolve_class",
]
