"""
Change detector - finds test units whose content changed.

Keeps the last-seen fingerprint of every test unit and compares each
emission against it.
"""

from typing import Dict, Hashable, Iterable, List, Optional

from shared.reporter.emojis import VeilleurEmoji
from shared.reporter.system_reporter import SystemReporter

from veilleur.core.units import BuildUnit

DEFAULT_TEST_MARKER = ".test"


class ChangeDetector:
    """
    Detects changed test units between emissions.

    Only units whose name contains the test marker are considered.
    The fingerprint table only grows; entries are overwritten each time
    their unit is observed.
    """

    def __init__(
        self,
        test_marker: str = DEFAULT_TEST_MARKER,
        reporter: Optional[SystemReporter] = None,
    ):
        """
        Initialize change detector.

        Args:
            test_marker: Substring identifying test units
            reporter: Optional reporter for logging
        """
        self.test_marker = test_marker
        self.reporter = reporter or SystemReporter(
            name="change_detector", level=20, verbose=1
        )
        self._fingerprints: Dict[str, Hashable] = {}

    @property
    def fingerprints(self) -> Dict[str, Hashable]:
        """Copy of the fingerprint table."""
        return dict(self._fingerprints)

    def is_test_unit(self, unit: BuildUnit) -> bool:
        """Check if a unit holds tests."""
        return self.test_marker in unit.name

    def filter_changed(self, units: Iterable[BuildUnit]) -> List[BuildUnit]:
        """
        Return test units whose fingerprint changed since last seen.

        Every eligible unit's table entry is updated, changed or not.
        Non-test units are neither compared nor recorded.

        Args:
            units: Units of the current emission

        Returns:
            Changed test units, in input order
        """
        changed = []

        for unit in units:
            if not self.is_test_unit(unit):
                continue

            previous = self._fingerprints.get(unit.name)
            seen = unit.name in self._fingerprints
            self._fingerprints[unit.name] = unit.fingerprint

            if not seen or previous != unit.fingerprint:
                changed.append(unit)

        if changed:
            names = ", ".join(unit.name for unit in changed)
            self.reporter.debug(
                f"{VeilleurEmoji.CHANGED} Changed units: {names}",
                context="ChangeDetector",
            )

        return changed

    def reset(self) -> None:
        """Forget every recorded fingerprint."""
        self._fingerprints.clear()
