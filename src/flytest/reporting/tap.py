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
"""TapPrinter — writes a test run as Test Anything Protocol (TAP) version 13."""

from __future__ import annotations

import sys
from typing import Any, TextIO

import yaml  # type: ignore[import-untyped]

_SCALARS = (str, int, float, bool, type(None))


def _yaml_safe(value: Any) -> Any:
    """Convert *value* into something ``yaml.safe_dump`` accepts."""
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        return {str(k): _yaml_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_yaml_safe(v) for v in value]
    return repr(value)


def exception_to_string(exc: BaseException, *, include_type: bool) -> str:
    """Render an exception the way diagnostics report it."""
    text = str(exc)
    if include_type or not text:
        return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
    return text


class TapPrinter:
    """TestListener producing TAP 13 output.

    Each test is numbered in start order. A test without a negative
    event ends as ``ok N - description``; failures and errors carry an
    indented YAML diagnostic block. The ``1..N`` plan is written when the
    outermost suite ends.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._test_number = 0
        self._suite_level = 0
        self._test_successful = True
        self.write("TAP version 13\n")

    @property
    def test_number(self) -> int:
        return self._test_number

    def write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()

    # -- outcome events ------------------------------------------------------

    def add_error(self, description: str, exc: BaseException) -> None:
        self._write_not_ok(description, "Error")
        self._write_diagnostic(exception_to_string(exc, include_type=True))

    def add_failure(self, description: str, exc: BaseException) -> None:
        self._write_not_ok(description, "Failure")

        data = None
        expected = getattr(exc, "expected", None)
        actual = getattr(exc, "actual", None)
        if expected is not None or actual is not None:
            data = {"got": actual, "expected": expected}

        self._write_diagnostic(exception_to_string(exc, include_type=False), data)

    def add_warning(self, description: str, message: str) -> None:
        self._write_not_ok(description, "Warning")

    def add_incomplete(self, description: str, reason: str = "") -> None:
        self._write_not_ok(description, "", "TODO Incomplete Test")

    def add_risky(self, description: str, reason: str = "") -> None:
        self.write(f"ok {self._test_number} - # RISKY{' ' + reason if reason else ''}\n")
        self._test_successful = False

    def add_skipped(self, description: str, reason: str = "") -> None:
        self.write(f"ok {self._test_number} - # SKIP{' ' + reason if reason else ''}\n")
        self._test_successful = False

    # -- lifecycle events ----------------------------------------------------

    def start_suite(self, name: str) -> None:
        self._suite_level += 1

    def end_suite(self, name: str) -> None:
        self._suite_level -= 1
        if self._suite_level == 0:
            self.write(f"1..{self._test_number}\n")

    def start_test(self, description: str) -> None:
        self._test_number += 1
        self._test_successful = True

    def end_test(self, description: str, output: str = "") -> None:
        if self._test_successful:
            self.write(f"ok {self._test_number} - {description}\n")

        output = output.strip()
        if output:
            for line in output.split("\n"):
                self.write(f"# {line}\n")

    # -- helpers -------------------------------------------------------------

    def _write_not_ok(self, description: str, prefix: str = "", directive: str = "") -> None:
        self.write(
            f"not ok {self._test_number} - "
            f"{prefix + ': ' if prefix else ''}"
            f"{description}"
            f"{' # ' + directive if directive else ''}\n"
        )
        self._test_successful = False

    def _write_diagnostic(self, text: str, data: dict[str, Any] | None = None) -> None:
        diagnostic: dict[str, Any] = {
            "message": text.split("\n", 1)[0],
            "severity": "fail",
        }
        if data is not None:
            diagnostic["data"] = _yaml_safe(data)

        body = yaml.safe_dump(
            diagnostic,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=2,
        )
        indented = "".join(f"  {line}\n" for line in body.splitlines())
        self.write(f"  ---\n{indented}  ...\n")
