"""
Unit tests for the LaborantTest base class and result models.

Usage:
    pytest shared/tests/unit/test_laborant_base.py

PYTEST_DONT_REWRITE: the Sample suites below must see plain assertion
messages, as they would outside pytest.
"""

import asyncio

import pytest

from shared.tests import LaborantTest
from shared.tests.models import IndividualTestResult
from shared.tests.models import TestFileResult as FileResult


class Sample(LaborantTest):
    component_name = "sample"

    def __init__(self):
        super().__init__()
        self.calls = []

    def setup(self):
        self.calls.append("setup")

    def teardown(self):
        self.calls.append("teardown")

    def setup_test(self):
        self.calls.append("setup_test")

    def test_pass(self):
        assert True

    def test_fail(self):
        assert 1 == 2, "one is not two"

    def test_error(self):
        raise KeyError("missing")


class AsyncSample(LaborantTest):
    async def async_setup(self):
        self.value = await asyncio.sleep(0, result=3)

    async def async_setup_test(self):
        self.value += 1

    async def test_value(self):
        assert self.value == 4


class BrokenSetup(LaborantTest):
    def setup(self):
        raise RuntimeError("no database")

    def test_never_runs(self):
        assert False


class TestLaborantBase:
    """Unit tests for LaborantTest.run_tests()."""

    # ================================================================
    # Sync suites
    # ================================================================

    def test_outcomes_classified(self):
        """Test pass, fail and error outcomes are told apart."""
        result = Sample().run_tests()
        statuses = {test.name: test.status for test in result.tests}

        assert statuses == {
            "test_error": "error",
            "test_fail": "fail",
            "test_pass": "pass",
        }
        assert (result.total, result.passed, result.failed, result.errors) == (
            3,
            1,
            1,
            1,
        )
        assert not result.success

    def test_error_messages(self):
        """Test failures keep the assertion message, errors the type."""
        result = Sample().run_tests()
        errors = {test.name: test.error for test in result.tests}

        assert errors["test_fail"] == "one is not two"
        assert errors["test_error"].startswith("KeyError")
        assert errors["test_pass"] is None

    def test_lifecycle_hooks(self):
        """Test setup and teardown wrap the discovered tests."""
        suite = Sample()
        suite.run_tests()

        assert suite.calls[0] == "setup"
        assert suite.calls[-1] == "teardown"
        assert suite.calls.count("setup_test") == 3

    def test_result_metadata(self):
        """Test the result names the suite and component."""
        result = Sample().run_tests()

        assert result.test_file == "Sample"
        assert result.component == "sample"
        assert result.category == "unit"
        assert result.success_rate == pytest.approx(100 / 3)

    # ================================================================
    # Async suites and failures
    # ================================================================

    def test_async_suite(self):
        """Test async hooks and tests share the suite's loop."""
        result = AsyncSample().run_tests()

        assert result.passed == 1
        assert result.success

    def test_setup_failure(self):
        """Test a failing setup reports one error and runs nothing."""
        result = BrokenSetup().run_tests()

        assert result.errors == 1
        assert result.total == 1
        assert [test.name for test in result.tests] == ["setup"]
        assert "no database" in result.tests[0].error

    def test_run_as_main_exit_code(self, capsys):
        """Test run_as_main prints results and exits non-zero on failure."""
        with pytest.raises(SystemExit) as exc_info:
            Sample.run_as_main()

        assert exc_info.value.code == 1
        assert "1/3 passed" in capsys.readouterr().out


class TestResultModels:
    """Unit tests for result aggregation."""

    def test_from_tests_counts(self):
        """Test counters are derived from the individual results."""
        result = FileResult.from_tests(
            test_file="TestX",
            component="x",
            category="unit",
            tests=[
                IndividualTestResult(name="test_a", status="pass", duration=0.1),
                IndividualTestResult(name="test_b", status="skip", duration=0.2),
            ],
            metadata={"test_class": "TestX"},
        )

        assert (result.total, result.passed, result.skipped) == (2, 1, 1)
        assert result.duration == pytest.approx(0.3)
        assert result.metadata["test_class"] == "TestX"
        assert "python_version" in result.metadata
        assert result.schema_version == "1.0"

    def test_empty_success_rate(self):
        """Test success rate of an empty result is zero."""
        result = Sample()._build_file_result([])

        assert result.success_rate == 0.0
        assert result.success
