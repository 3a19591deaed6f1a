"""Reporting utilities shared by Lumiere components."""

from shared.reporter.system_reporter import SystemReporter

__all__ = ["SystemReporter"]
