# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""ConsolePrinter — verbose, coloured per-test output for interactive runs."""

from __future__ import annotations

from collections import Counter
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from flytest.reporting.tap import exception_to_string

FLYTEST_THEME = Theme({
    "pass": "bold green",
    "fail": "bold red",
    "error": "bold red",
    "skip": "bold yellow",
    "todo": "yellow",
    "risky": "bold yellow",
    "warn": "bold yellow",
    "dim": "dim",
})


class ConsolePrinter:
    """TestListener writing one labelled line per test through Rich.

    Used when tests run in debug mode. Exception details are printed
    below the offending test; a summary closes the outermost suite.
    """

    def __init__(self, stream: TextIO | None = None, console: Console | None = None) -> None:
        self._console = console or Console(file=stream, theme=FLYTEST_THEME, highlight=False)
        self._suite_level = 0
        self._current_label: str | None = None
        self._counts: Counter[str] = Counter()

    @property
    def counts(self) -> dict[str, int]:
        """Number of tests per outcome label."""
        return dict(self._counts)

    def start_suite(self, name: str) -> None:
        self._suite_level += 1

    def end_suite(self, name: str) -> None:
        self._suite_level -= 1
        if self._suite_level == 0:
            total = sum(self._counts.values())
            parts = [f"{count} {label.lower()}" for label, count in sorted(self._counts.items())]
            self._console.print(f"[dim]{total} tests: {', '.join(parts) or 'none'}[/dim]")

    def start_test(self, description: str) -> None:
        self._current_label = None

    def end_test(self, description: str, output: str = "") -> None:
        if self._current_label is None:
            self._line("PASS", "pass", description)
        output = output.strip()
        if output:
            for line in output.split("\n"):
                self._console.print(f"    [dim]{escape(line)}[/dim]")

    def add_error(self, description: str, exc: BaseException) -> None:
        self._line("ERROR", "error", description, exception_to_string(exc, include_type=True))

    def add_failure(self, description: str, exc: BaseException) -> None:
        self._line("FAIL", "fail", description, exception_to_string(exc, include_type=False))

    def add_warning(self, description: str, message: str) -> None:
        self._line("WARN", "warn", description, message)

    def add_skipped(self, description: str, reason: str = "") -> None:
        self._line("SKIP", "skip", description, reason)

    def add_incomplete(self, description: str, reason: str = "") -> None:
        self._line("TODO", "todo", description, reason)

    def add_risky(self, description: str, reason: str = "") -> None:
        self._line("RISKY", "risky", description, reason)

    def _line(self, label: str, style: str, description: str, detail: str = "") -> None:
        # The first outcome of a test decides its label in the summary.
        if self._current_label is None:
            self._current_label = label
            self._counts[label] += 1
        self._console.print(f"[{style}]{label:<5}[/{style}] {escape(description)}")
        if detail:
            for line in detail.strip().split("\n"):
                self._console.print(f"      {escape(line)}")
