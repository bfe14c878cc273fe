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
"""Tests for TapPrinter — TAP 13 lines for each test-run event."""

import io

import pytest
import yaml

from flytest.reporting import TapPrinter
from flytest.reporting import listener
from flytest.testing.case import ResponseAssertionError


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def printer(stream: io.StringIO) -> TapPrinter:
    return TapPrinter(stream)


def lines(stream: io.StringIO) -> list[str]:
    return stream.getvalue().splitlines()


def run_one(printer: TapPrinter, description: str, event=None, output: str = "") -> None:
    printer.start_test(description)
    if event is not None:
        event()
    printer.end_test(description, output)


class TestHeaderAndPlan:
    def test_writes_version_on_construction(self, printer: TapPrinter, stream: io.StringIO):
        assert lines(stream) == ["TAP version 13"]

    def test_plan_written_when_outer_suite_ends(self, printer: TapPrinter, stream: io.StringIO):
        printer.start_suite("session")
        printer.start_suite("tests/test_a.py")
        run_one(printer, "test_a")
        printer.end_suite("tests/test_a.py")
        assert "1..1" not in lines(stream)

        run_one(printer, "test_b")
        printer.end_suite("session")
        assert lines(stream)[-1] == "1..2"

    def test_empty_run_plans_zero_tests(self, printer: TapPrinter, stream: io.StringIO):
        printer.start_suite("session")
        printer.end_suite("session")
        assert lines(stream)[-1] == "1..0"

    def test_implements_listener(self, printer: TapPrinter):
        assert isinstance(printer, listener.TestListener)


class TestResults:
    def test_passing_tests_are_numbered(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_one")
        run_one(printer, "test_two")
        assert lines(stream)[1:] == ["ok 1 - test_one", "ok 2 - test_two"]
        assert printer.test_number == 2

    def test_failure_with_diagnostic(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_sum", lambda: printer.add_failure("test_sum", AssertionError("assert 3 == 4\nmore")))
        out = lines(stream)
        assert out[1] == "not ok 1 - Failure: test_sum"
        assert out[2] == "  ---"
        assert out[-1] == "  ..."
        block = yaml.safe_load("\n".join(out[3:-1]))
        assert block == {"message": "assert 3 == 4", "severity": "fail"}
        assert all(line.startswith("  ") for line in out[2:])

    def test_failure_with_comparison_data(self, printer: TapPrinter, stream: io.StringIO):
        exc = ResponseAssertionError("status mismatch", expected=200, actual=404)
        run_one(printer, "test_page", lambda: printer.add_failure("test_page", exc))
        block = yaml.safe_load("\n".join(lines(stream)[3:-1]))
        assert block["data"] == {"got": 404, "expected": 200}

    def test_error_includes_exception_type(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_db", lambda: printer.add_error("test_db", KeyError("session")))
        out = lines(stream)
        assert out[1] == "not ok 1 - Error: test_db"
        block = yaml.safe_load("\n".join(out[3:-1]))
        assert block["message"] == "KeyError: 'session'"
        assert "ok 1 - test_db" not in out

    def test_warning(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_w", lambda: printer.add_warning("test_w", "deprecated"))
        assert lines(stream)[1:] == ["not ok 1 - Warning: test_w"]

    def test_incomplete_is_todo(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_later", lambda: printer.add_incomplete("test_later", "not done"))
        assert lines(stream)[1:] == ["not ok 1 - test_later # TODO Incomplete Test"]

    def test_skipped_with_reason(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_s", lambda: printer.add_skipped("test_s", "no database"))
        assert lines(stream)[1:] == ["ok 1 - # SKIP no database"]

    def test_skipped_without_reason(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_s", lambda: printer.add_skipped("test_s"))
        assert lines(stream)[1:] == ["ok 1 - # SKIP"]

    def test_risky(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_r", lambda: printer.add_risky("test_r", "no assertions"))
        assert lines(stream)[1:] == ["ok 1 - # RISKY no assertions"]

    def test_success_resets_for_next_test(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_bad", lambda: printer.add_failure("test_bad", AssertionError("x")))
        run_one(printer, "test_good")
        assert lines(stream)[-1] == "ok 2 - test_good"


class TestOutputDiagnostics:
    def test_captured_output_is_commented(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_print", output="hello\nworld\n")
        assert lines(stream)[1:] == ["ok 1 - test_print", "# hello", "# world"]

    def test_blank_output_is_ignored(self, printer: TapPrinter, stream: io.StringIO):
        run_one(printer, "test_quiet", output="  \n")
        assert lines(stream)[1:] == ["ok 1 - test_quiet"]
