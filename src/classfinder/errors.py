# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by catalogs, sources, and configuration."""

from __future__ import annotations


class ClassFinderError(RuntimeError):
    """Base class for every error raised by :mod:`classfinder`."""


class UnresolvableClassError(ClassFinderError):
    """Raised when a class name cannot be imported or does not name a class."""

    def __init__(self, class_name: str, reason: str | None = None) -> None:
        """Record ``class_name`` and build a descriptive message.

        Args:
            class_name: Dotted name that failed to resolve.
            reason: Optional human readable explanation of the failure.
        """

        self.class_name = class_name
        message = f"Unable to resolve class {class_name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnreflectedEntryError(ClassFinderError):
    """Raised when a structural query runs against an entry that was never reflected."""

    def __init__(self, class_name: str, query: str) -> None:
        """Record the offending entry and query.

        Args:
            class_name: Catalog key holding an unreflected value.
            query: Structural query that was requested.
        """

        self.class_name = class_name
        self.query = query
        super().__init__(
            f"Cannot evaluate {query}() on {class_name!r}: entry has not been reflected; call reflect() first",
        )


class ClassSourceError(ClassFinderError):
    """Raised when a class source cannot produce its class map."""


class ConfigError(ClassFinderError):
    """Raised when configuration input is invalid."""


__all__ = [
    "ClassFinderError",
    "ClassSourceError",
    "ConfigError",
    "UnreflectedEntryError",
    "UnresolvableClassError",
]
