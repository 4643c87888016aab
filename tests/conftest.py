"""
Pytest fixtures for the data profiler test suite.

Provides:
- Logging reset between tests
- An AnalysisService pinned to a deterministic clock
- Small in-memory workbook builders
"""

import io
from datetime import datetime, timezone

import openpyxl
import pytest

from data_profiler.domain.clock import DeterministicClock
from data_profiler.logging_config import LogContext, reset_logging
from data_profiler.services import AnalysisService

FIXED_TIME = datetime(2024, 6, 1, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(FIXED_TIME)


@pytest.fixture
def service(clock) -> AnalysisService:
    return AnalysisService(clock=clock)


def build_workbook(rows: list[list]) -> bytes:
    """Serialize rows into a single-sheet .xlsx payload."""
    wb = openpyxl.Workbook()
    sheet = wb.active
    for row in rows:
        sheet.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_workbook():
    return build_workbook
