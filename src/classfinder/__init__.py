# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover classes by dotted-name prefix and structural traits."""

from __future__ import annotations

from importlib import metadata

from .catalog import ClassCatalog
from .config import FinderConfig, load_config
from .entries import EntryValue, Reflected, Unreflected
from .errors import (
    ClassFinderError,
    ClassSourceError,
    ConfigError,
    UnreflectedEntryError,
    UnresolvableClassError,
)
from .interfaces import ClassSource, Reflector, StructuralHandle
from .reflection import ClassReflector, ReflectedClass, resolve_class
from .sources import LoadedModuleClassSource, MappingClassSource, PackageScanClassSource, build_class_source

__all__ = [
    "ClassCatalog",
    "ClassFinderError",
    "ClassReflector",
    "ClassSource",
    "ClassSourceError",
    "ConfigError",
    "EntryValue",
    "FinderConfig",
    "LoadedModuleClassSource",
    "MappingClassSource",
    "PackageScanClassSource",
    "Reflected",
    "ReflectedClass",
    "Reflector",
    "StructuralHandle",
    "Unreflected",
    "UnreflectedEntryError",
    "UnresolvableClassError",
    "__version__",
    "build_class_source",
    "load_config",
    "resolve_class",
]

try:
    __version__ = metadata.version("classfinder")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
