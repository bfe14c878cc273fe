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
"""pytest plugin translating a pytest run into TestListener events.

Inactive unless ``--flytest-report`` is given. The printer is chosen once
from configuration (see :func:`~flytest.reporting.selection.select_printer`)
and writes to ``--flytest-report-file`` or, by default, replaces pytest's
terminal reporter on stdout.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Generator
from typing import Any, TextIO

import pytest

from flytest.core.config import Config
from flytest.logging.port import LoggingPort
from flytest.logging.structlog_adapter import StructlogAdapter
from flytest.reporting.listener import TestListener
from flytest.reporting.selection import select_printer

logger = logging.getLogger(__name__)

PLUGIN_NAME = "flytest-reporting"


def _skip_reason(report: Any) -> str:
    longrepr = report.longrepr
    if isinstance(longrepr, tuple) and len(longrepr) == 3:
        reason = str(longrepr[2])
    else:
        reason = str(longrepr or "")
    return reason.removeprefix("Skipped: ").removeprefix("Skipped")


class ReportingPlugin:
    """Feeds pytest's runtest hooks into a :class:`TestListener`."""

    def __init__(self, listener: TestListener, stream: TextIO | None = None, owns_stream: bool = False) -> None:
        self.listener = listener
        self._stream = stream
        self._owns_stream = owns_stream
        self._exceptions: dict[tuple[str, str], BaseException] = {}
        self._output: dict[str, str] = {}

    def pytest_sessionstart(self, session: Any) -> None:
        self.listener.start_suite(session.name)

    def pytest_sessionfinish(self, session: Any) -> None:
        self.listener.end_suite(session.name)
        if self._owns_stream and self._stream is not None:
            self._stream.close()

    def pytest_runtest_logstart(self, nodeid: str, location: Any) -> None:
        self.listener.start_test(nodeid)

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item: Any, call: Any) -> Generator[None, Any, None]:
        outcome = yield
        report = outcome.get_result()
        if report.failed and call.excinfo is not None:
            self._exceptions[(item.nodeid, call.when)] = call.excinfo.value

    def pytest_runtest_logreport(self, report: Any) -> None:
        nodeid = report.nodeid
        self._output[nodeid] = report.capstdout
        exc = self._exceptions.pop((nodeid, report.when), None)
        xfail_reason = getattr(report, "wasxfail", None)

        if report.skipped:
            if xfail_reason is not None:
                self.listener.add_incomplete(nodeid, xfail_reason)
            else:
                self.listener.add_skipped(nodeid, _skip_reason(report))
        elif report.failed:
            if exc is None:
                exc = AssertionError(report.longreprtext)
            if report.when == "call" and isinstance(exc, AssertionError):
                self.listener.add_failure(nodeid, exc)
            else:
                self.listener.add_error(nodeid, exc)
        elif report.when == "call" and xfail_reason is not None:
            reason = f"unexpectedly passed: {xfail_reason}" if xfail_reason else "unexpectedly passed"
            self.listener.add_risky(nodeid, reason)

    def pytest_runtest_logfinish(self, nodeid: str, location: Any) -> None:
        self.listener.end_test(nodeid, self._output.pop(nodeid, ""))


def pytest_addoption(parser: Any) -> None:
    group = parser.getgroup("flytest", "flytest test reporting")
    group.addoption(
        "--flytest-report",
        action="store_true",
        dest="flytest_report",
        default=False,
        help="Report the run through the flytest printer (TAP or console, per FLYTEST_TESTS_DEBUG).",
    )
    group.addoption(
        "--flytest-report-file",
        dest="flytest_report_file",
        default=None,
        metavar="PATH",
        help="Write the flytest report to PATH instead of stdout.",
    )


@pytest.hookimpl(trylast=True)
def pytest_configure(config: Any) -> None:
    # Runs after _pytest.terminal has registered the terminal reporter.
    if not config.getoption("flytest_report"):
        return

    settings = Config.from_sources(config.rootpath)
    logging_port: LoggingPort = StructlogAdapter()
    logging_port.configure(settings)

    output = config.getoption("flytest_report_file") or settings.get("flytest.reporting.output")
    stream: TextIO
    if output:
        stream = open(output, "w", encoding="utf-8")  # noqa: SIM115
    else:
        stream = sys.stdout
        reporter = config.pluginmanager.getplugin("terminalreporter")
        if reporter is not None:
            config.pluginmanager.unregister(reporter)

    printer = select_printer(settings, stream)
    logger.debug("Reporting with %s to %s", type(printer).__name__, output or "stdout")
    config.pluginmanager.register(
        ReportingPlugin(printer, stream, owns_stream=bool(output)),
        PLUGIN_NAME,
    )
