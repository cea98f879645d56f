"""
Shared test fixtures and sample inputs for timewindow-ingest tests.

All sample batches are defined here as module-level constants for easy
discovery. Row numbers in assertions refer to the cleaned rows (comments
and blank lines are not counted).
"""

from pathlib import Path

import pytest

from timewindow_ingest.config import IngestConfig

# ---------------------------------------------------------------------------
# Sample batches -- one per layout plus a few broken ones
# ---------------------------------------------------------------------------
SINGLE_COLUMN_SAMPLE = """\
# exported from the firewall console
2025-07-26T00:49:16Z

2025-07-26T00:49:16.2146161Z
1753490956
07/26/2025 00:49:16
"""

TIMESTAMP_DURATION_SAMPLE = """\
2025-07-26T00:49:16.2146161Z,5
2025-07-26 00:50:30,10
1753491136,15
2025/07/26 00:52:45,3
"""

START_END_SAMPLE = """\
2025-07-26T00:49:16Z,2025-07-26T00:49:21Z
2025-07-26T00:50:30Z,2025-07-26T00:50:45Z
2025-07-26T00:52:15Z,2025-07-26T00:52:18Z
"""

UNKNOWN_SAMPLE = """\
invalid,data,here
more,invalid,stuff
"""

MIXED_SAMPLE = """\
invalid-timestamp,5
2025-07-26T00:49:16Z,invalid-duration
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def analysis_config() -> IngestConfig:
    """Default policy: 1..3600 second ranges, no uniform window."""
    return IngestConfig()


@pytest.fixture
def windowed_config() -> IngestConfig:
    """Policy with a 5-second uniform window for single-column input."""
    return IngestConfig(window_seconds=5)


@pytest.fixture
def write_input(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(content: str, name: str = "timestamps.csv") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (exercises the full file pipeline)",
    )
