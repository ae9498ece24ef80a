# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration model and ``pyproject.toml`` loading for classfinder."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .reflection import DEFAULT_TRAIT_SUFFIXES

LOGGER = logging.getLogger(__name__)

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "classfinder"


class FinderConfig(BaseModel):
    """Settings controlling where classes are discovered and how they are classified."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    packages: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    trait_suffixes: list[str] = Field(default_factory=lambda: list(DEFAULT_TRAIT_SUFFIXES))
    include_private: bool = False


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Translate kebab-case TOML keys into model field names."""

    return {key.replace("-", "_"): value for key, value in payload.items()}


def load_config(root: Path | None = None) -> FinderConfig:
    """Load configuration from ``[tool.classfinder]`` in ``root/pyproject.toml``.

    Args:
        root: Project directory containing ``pyproject.toml``; defaults to the
            current working directory.

    Returns:
        FinderConfig: Parsed configuration, or defaults when the file or
        section is absent.

    Raises:
        ConfigError: If the file is not valid TOML or the section is invalid.
    """

    path = (root or Path.cwd()) / PYPROJECT_FILENAME
    if not path.is_file():
        LOGGER.debug("No %s at %s; using defaults", PYPROJECT_FILENAME, path.parent)
        return FinderConfig()
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    tool_section = data.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return FinderConfig()
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return FinderConfig()
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    try:
        return FinderConfig.model_validate(_normalise_keys(section))
    except ValidationError as exc:
        raise ConfigError(f"Invalid [tool.{PYPROJECT_SECTION_KEY}] in {path}: {exc}") from exc


__all__ = ["FinderConfig", "PYPROJECT_FILENAME", "load_config"]
