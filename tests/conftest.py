import csv

import pytest

from fakes import FakeClock
from runner_config import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        download_dir=str(tmp_path / "data"),
        ledger_path=str(tmp_path / "run_history.csv"),
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def write_export():
    """Write a minimal export CSV with one row per description."""

    def write(path, descriptions):
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Time", "Type", "Description"])
            for i, description in enumerate(descriptions):
                writer.writerow([f"10:00:{i:02d}", "Info", description])

    return write
