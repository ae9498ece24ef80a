# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich-backed output for the ``classfinder`` command line."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from rich.console import Console, RenderableType
from rich.rule import Rule
from rich.text import Text

MessageLevel = Literal["info", "ok", "warn", "fail"]

_MARKERS: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️", "cyan"),
    "ok": ("✅", "green"),
    "warn": ("⚠️", "yellow"),
    "fail": ("❌", "red"),
}


@dataclass(frozen=True, slots=True)
class ConsoleOutput:
    """Print CLI messages honouring the ``--no-color`` and ``--no-emoji`` toggles.

    Rich decides on its own whether the current stdout is a terminal; ``color``
    only ever turns styling off.
    """

    color: bool = True
    emoji: bool = True

    def _console(self) -> Console:
        # Built per call so output follows whatever sys.stdout is at the time.
        return Console(no_color=not self.color, emoji=self.emoji, highlight=False, soft_wrap=True)

    def render(self, renderable: RenderableType) -> None:
        """Print an arbitrary rich renderable such as a table."""

        self._console().print(renderable)

    def message(self, level: MessageLevel, text: str) -> None:
        """Print ``text`` with the marker and colour of ``level``.

        Args:
            level: One of ``info``, ``ok``, ``warn`` or ``fail``.
            text: Message body.
        """

        symbol, style = _MARKERS[level]
        body = f"{symbol} {text}" if self.emoji else text
        self._console().print(Text(body, style=style if self.color else ""))

    def section(self, title: str) -> None:
        """Print a header separating one block of output from the next."""

        console = self._console()
        if self.color:
            console.print()
            console.print(Rule(title))
        else:
            console.print(Text(f"\n--- {title} ---"))


__all__ = ["ConsoleOutput", "MessageLevel"]
