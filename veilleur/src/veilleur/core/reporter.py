"""
Veilleur reporter - creates Rich renderable objects for test runs.

Responsible for:
- Creating Rich visual components (Panels, Text)
- Formatting run data into displayable objects
- NOT responsible for printing/rendering

The test runner handles actual rendering via Rich Console.
"""

from typing import List

from rich.panel import Panel
from rich.text import Text
from shared.tests.models import TestFileResult, TestStatus

PANEL_WIDTH = 67

STATUS_STYLES = {
    TestStatus.PASS.value: ("✓", "green"),
    TestStatus.FAIL.value: ("✗", "red"),
    TestStatus.ERROR.value: ("!", "red"),
    TestStatus.SKIP.value: ("-", "yellow"),
}


class VeilleurReporter:
    """
    Creates Rich renderable objects for test runs.
    """

    def create_run_header(self, files: List[str]) -> Panel:
        """
        Create panel listing the files loaded for a run.

        Args:
            files: Virtual paths of loaded test files

        Returns:
            Rich Panel object
        """
        content = Text()
        content.append("\n")

        for path in files:
            content.append(f"  {path}\n")

        content.append("\n")
        file_word = "file" if len(files) == 1 else "files"
        content.append(f"  {len(files)} changed test {file_word}\n", style="bold")

        return Panel(
            content,
            title="[bold]Veilleur Test Run[/bold]",
            border_style="white",
            padding=(0, 1),
            width=PANEL_WIDTH,
        )

    def create_suite_panel(self, result: TestFileResult) -> Panel:
        """
        Create panel with the results of one test suite.

        Args:
            result: Suite result

        Returns:
            Rich Panel object with one line per test
        """
        content = Text()
        content.append("\n")

        for test in result.tests:
            symbol, style = STATUS_STYLES.get(test.status, ("?", "white"))
            content.append(f"  {symbol} ", style=style)
            content.append(f"{test.name}")
            content.append(f" ({test.duration:.2f}s)\n", style="dim")
            if test.error:
                content.append(f"      {test.error}\n", style="red")

        content.append("\n")
        content.append(
            f"  {result.passed}/{result.total} passed ({result.duration:.2f}s)\n"
        )

        return Panel(
            content,
            title=f"[bold]{result.test_file}[/bold]",
            border_style="green" if result.success else "red",
            padding=(0, 1),
            width=PANEL_WIDTH,
        )

    def create_run_summary(
        self, total: int, passed: int, failed: int, errors: int, duration: float
    ) -> Panel:
        """
        Create final summary panel for a run.

        Args:
            total: Total tests
            passed: Passed tests
            failed: Failed tests
            errors: Errored tests
            duration: Total duration in seconds

        Returns:
            Rich Panel object
        """
        success = failed == 0 and errors == 0

        content = Text()
        content.append("\n")
        content.append(f"  Tests:    {total}\n")
        content.append(f"  Passed:   {passed}\n", style="green")
        content.append(f"  Failed:   {failed}\n", style="red" if failed else None)
        content.append(f"  Errors:   {errors}\n", style="red" if errors else None)
        content.append(f"  Duration: {duration:.2f}s\n")

        status = "ALL TESTS PASSED" if success else "TESTS FAILED"

        return Panel(
            content,
            title=f"[bold]{status}[/bold]",
            border_style="green" if success else "red",
            padding=(0, 1),
            width=PANEL_WIDTH,
        )
