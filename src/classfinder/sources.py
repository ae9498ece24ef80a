# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Class sources producing the ``class name -> source path`` map.

Three strategies are provided: a fixed mapping for injection and tests, a
snapshot of the classes defined by already imported modules, and a static
scan of package directories that parses files with :mod:`ast` so no scanned
module code is executed.
"""

from __future__ import annotations

import ast
import importlib.util
import logging
import re
import sys
from collections.abc import Iterable, Iterator, Mapping, Sequence
from fnmatch import fnmatchcase
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import TYPE_CHECKING, Final

from .errors import ClassSourceError
from .interfaces import ClassSource

if TYPE_CHECKING:
    from .config import FinderConfig

LOGGER = logging.getLogger(__name__)

PYTHON_SUFFIX: Final[str] = ".py"
PACKAGE_INIT: Final[str] = "__init__"
_SKIPPED_DIRECTORIES: Final[frozenset[str]] = frozenset({"__pycache__"})
_CLASS_STATEMENT: Final[re.Pattern[str]] = re.compile(r"^class\s+([A-Za-z_]\w*)", re.MULTILINE)


def is_module_excluded(module_name: str, patterns: Iterable[str]) -> bool:
    """Return whether ``module_name`` is covered by any exclusion pattern.

    A pattern excludes the module it names, all of its submodules, and any
    module matching it as a shell-style glob.

    Args:
        module_name: Dotted module name to test.
        patterns: Module names or glob patterns.

    Returns:
        bool: ``True`` when the module should be skipped.
    """

    for pattern in patterns:
        if module_name == pattern or module_name.startswith(f"{pattern}."):
            return True
        if fnmatchcase(module_name, pattern):
            return True
    return False


def _is_public(qualname: str) -> bool:
    return not any(part.startswith("_") for part in qualname.split("."))


class MappingClassSource(ClassSource):
    """Serve a fixed class map supplied by the caller."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        """Capture a private copy of ``mapping``.

        Args:
            mapping: Class names mapped to source paths.
        """

        self._mapping = dict(mapping)

    def class_map(self) -> Mapping[str, str]:
        """Return a read-only view of the captured mapping.

        Returns:
            Mapping[str, str]: The mapping supplied at construction time.
        """

        return MappingProxyType(dict(self._mapping))


class LoadedModuleClassSource(ClassSource):
    """Report the classes defined by every module currently in :data:`sys.modules`."""

    def __init__(self, *, exclude: Sequence[str] = (), include_private: bool = True) -> None:
        """Create a source over the loaded modules.

        Args:
            exclude: Module names or glob patterns to ignore.
            include_private: When ``False`` skip classes with underscore-prefixed names.
        """

        self._exclude = tuple(exclude)
        self._include_private = include_private

    def class_map(self) -> Mapping[str, str]:
        """Return classes defined by loaded modules in import order.

        Returns:
            Mapping[str, str]: Class names mapped to the defining module's file,
            or an empty string for built-in and namespace modules.
        """

        entries: dict[str, str] = {}
        for module_name, module in list(sys.modules.items()):
            if not isinstance(module, ModuleType) or is_module_excluded(module_name, self._exclude):
                continue
            path = getattr(module, "__file__", None) or ""
            for cls in _defined_classes(module_name, vars(module).values()):
                qualname = cls.__qualname__
                if not self._include_private and not _is_public(qualname):
                    continue
                entries.setdefault(f"{module_name}.{qualname}", path)
        LOGGER.debug("Loaded modules expose %d classes", len(entries))
        return entries


def _defined_classes(module_name: str, members: Iterable[object]) -> Iterator[type]:
    """Yield classes in ``members`` defined by ``module_name``, including nested ones."""

    for member in list(members):
        if not isinstance(member, type) or member.__module__ != module_name:
            continue
        if "<locals>" in member.__qualname__:
            continue
        yield member
        nested = [
            value
            for value in vars(member).values()
            if isinstance(value, type) and value.__qualname__.startswith(f"{member.__qualname__}.")
        ]
        yield from _defined_classes(module_name, nested)


class PackageScanClassSource(ClassSource):
    """Build a class map by statically parsing the files of importable packages.

    Packages are located with :func:`importlib.util.find_spec`; locating a
    dotted package imports its parent packages but never the scanned modules.
    """

    def __init__(
        self,
        packages: Sequence[str],
        *,
        exclude: Sequence[str] = (),
        include_private: bool = False,
    ) -> None:
        """Create a scanner for ``packages``.

        Args:
            packages: Importable package or module names to scan.
            exclude: Module names or glob patterns to ignore.
            include_private: When ``True`` keep underscore-prefixed class names.
        """

        self._packages = tuple(packages)
        self._exclude = tuple(exclude)
        self._include_private = include_private

    @property
    def packages(self) -> tuple[str, ...]:
        """Return the package names scanned by this source."""

        return self._packages

    def class_map(self) -> Mapping[str, str]:
        """Return every class defined in the configured packages.

        Returns:
            Mapping[str, str]: Class names mapped to absolute file paths.

        Raises:
            ClassSourceError: If a configured package cannot be located.
        """

        entries: dict[str, str] = {}
        for package in self._packages:
            for module_name, path in self._iter_modules(package):
                if is_module_excluded(module_name, self._exclude):
                    continue
                for qualname in self._scan_file(path):
                    entries.setdefault(f"{module_name}.{qualname}", str(path))
        LOGGER.debug("Scanned %s: %d classes", ", ".join(self._packages), len(entries))
        return entries

    def _iter_modules(self, package: str) -> Iterator[tuple[str, Path]]:
        try:
            spec = importlib.util.find_spec(package)
        except (ImportError, ValueError) as exc:
            raise ClassSourceError(f"Cannot locate package {package!r}: {exc}") from exc
        if spec is None:
            raise ClassSourceError(f"Cannot locate package {package!r}")
        if spec.submodule_search_locations is None:
            if spec.origin and spec.origin.endswith(PYTHON_SUFFIX):
                yield package, Path(spec.origin)
            return
        for location in spec.submodule_search_locations:
            yield from _walk_package(package, Path(location))

    def _scan_file(self, path: Path) -> list[str]:
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOGGER.warning("Skipping %s: %s", path, exc)
            return []
        try:
            tree = ast.parse(text, filename=str(path))
        except (SyntaxError, ValueError) as exc:
            # Names listed here fail on reflection with the real SyntaxError.
            LOGGER.warning("Cannot parse %s (%s); listing top-level class statements only", path, exc)
            qualnames = _CLASS_STATEMENT.findall(text)
        else:
            qualnames = _class_qualnames(tree.body, prefix="")
        if self._include_private:
            return qualnames
        return [name for name in qualnames if _is_public(name)]


def _walk_package(package: str, root: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(module name, path)`` pairs for Python files beneath ``root``."""

    for path in sorted(root.rglob(f"*{PYTHON_SUFFIX}")):
        relative = path.relative_to(root).with_suffix("")
        parts = list(relative.parts)
        if any(part in _SKIPPED_DIRECTORIES or not part.isidentifier() for part in parts):
            continue
        if parts[-1] == PACKAGE_INIT:
            parts.pop()
        yield ".".join([package, *parts]), path


def _class_qualnames(body: Sequence[ast.stmt], *, prefix: str) -> list[str]:
    """Return dotted qualnames of classes defined in ``body`` and nested class bodies."""

    names: list[str] = []
    for node in body:
        if not isinstance(node, ast.ClassDef):
            continue
        qualname = f"{prefix}{node.name}"
        names.append(qualname)
        names.extend(_class_qualnames(node.body, prefix=f"{qualname}."))
    return names


def build_class_source(config: FinderConfig) -> ClassSource:
    """Return the class source described by ``config``.

    Args:
        config: Finder configuration.

    Returns:
        ClassSource: A package scanner when packages are configured, otherwise
        a snapshot of the loaded modules.
    """

    if config.packages:
        return PackageScanClassSource(
            config.packages,
            exclude=config.exclude,
            include_private=config.include_private,
        )
    return LoadedModuleClassSource(exclude=config.exclude, include_private=config.include_private)


__all__ = [
    "LoadedModuleClassSource",
    "MappingClassSource",
    "PackageScanClassSource",
    "build_class_source",
    "is_module_excluded",
]
