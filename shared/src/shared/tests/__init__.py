"""
Shared testing utilities for Lumiere components.

Provides standardized test structure:
- LaborantTest: Base class for all tests
- Test result models
"""

from shared.tests.models import (
    SCHEMA_VERSION,
    IndividualTestResult,
    TestFileResult,
    TestStatus,
)
from shared.tests.test_base import LaborantTest

__all__ = [
    "LaborantTest",
    "TestStatus",
    "IndividualTestResult",
    "TestFileResult",
    "SCHEMA_VERSION",
]
