"""
Reporting-specific test fixtures.

Provides:
- ReportingConfig with defaults
- ReportingService instances wired to the test session
"""

import pytest

from farm_modules.reporting.config import ReportingConfig
from farm_modules.reporting.service import ReportingService


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig.with_defaults()


@pytest.fixture
def reporting_service(
    session,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test session."""
    return ReportingService(
        session=session,
        clock=deterministic_clock,
        config=reporting_config,
    )
