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
"""Printer selection — debug runs get console output, CI runs get TAP."""

from __future__ import annotations

from typing import TextIO

from flytest.core.config import Config, parse_bool
from flytest.reporting.console import ConsolePrinter
from flytest.reporting.listener import TestListener
from flytest.reporting.tap import TapPrinter

DEBUG_KEY = "flytest.tests.debug"


def is_tests_debug(config: Config) -> bool:
    """Read the tests debug flag (env ``FLYTEST_TESTS_DEBUG``).

    An unset flag means debug mode is on.
    """
    value = config.get(DEBUG_KEY)
    if value is None:
        return True
    return parse_bool(value)


def select_printer(config: Config, stream: TextIO | None = None) -> TestListener:
    """Build the printer matching the configured debug mode."""
    if is_tests_debug(config):
        return ConsolePrinter(stream)
    return TapPrinter(stream)
