# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path
from textwrap import dedent

import pytest

SAMPLE_PACKAGES = ("sample_app", "broken_app")

_SAMPLE_FILES: dict[str, str] = {
    "sample_app/__init__.py": "",
    "sample_app/contracts.py": """
        from abc import ABC, abstractmethod
        from typing import Protocol


        class Contract(ABC):
            @abstractmethod
            def handle(self) -> str: ...


        class Greeter(Protocol):
            def greet(self) -> str: ...
    """,
    "sample_app/shapes.py": """
        from abc import ABC, abstractmethod

        from sample_app.contracts import Contract


        class Shape(ABC):
            @abstractmethod
            def area(self) -> float: ...

            def describe(self) -> str:
                return f"{type(self).__name__} with area {self.area()}"


        class Square(Shape, Contract):
            def area(self) -> float:
                return 4.0

            def handle(self) -> str:
                return "square"


        class Circle(Shape):
            def area(self) -> float:
                return 3.14


        class LoggingMixin:
            def log(self, message: str) -> str:
                return message


        class _Hidden:
            pass


        class Outer:
            class Inner:
                pass
    """,
    "sample_app/traits.py": """
        class Serializable:
            __trait__ = True

            def dump(self) -> dict:
                return dict(vars(self))
    """,
    "broken_app/__init__.py": "",
    "broken_app/fine.py": """
        class Fine:
            pass
    """,
    "broken_app/bad.py": """
        import classfinder_missing_dependency


        class Broken:
            pass
    """,
    "broken_app/syntax.py": """
        class Unparsable(:
            pass
    """,
}


def _forget_sample_modules() -> None:
    for name in list(sys.modules):
        if name.split(".", 1)[0] in SAMPLE_PACKAGES:
            del sys.modules[name]


@pytest.fixture
def sample_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Write the synthetic ``sample_app`` and ``broken_app`` packages and make them importable."""

    for relative, source in _SAMPLE_FILES.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(source).lstrip(), encoding="utf-8")
    _forget_sample_modules()
    monkeypatch.syspath_prepend(str(tmp_path))
    try:
        yield tmp_path
    finally:
        _forget_sample_modules()
