"""
Run history ledger: one CSV row per integration run, newest last.

The `things` column holds the extracted items as a JSON array string.
"""

import csv
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime

import pandas as pd
import pytz

logger = logging.getLogger(__name__)

LEDGER_HEADER = ["timestamp", "run_id", "status", "actions", "things"]


def utc_timestamp():
    return datetime.now(pytz.UTC).isoformat(timespec="seconds")


@dataclass
class ExtractedItem:
    name: str
    id: str

    def to_dict(self):
        return {"name": self.name, "id": self.id}


@dataclass
class RunRecord:
    run_id: str
    status: str
    action_count: int = 0
    items: list = field(default_factory=list)
    timestamp: str = field(default_factory=utc_timestamp)

    def to_row(self):
        things = json.dumps([item.to_dict() for item in self.items])
        return [self.timestamp, self.run_id, self.status, self.action_count, things]

    @classmethod
    def from_row(cls, row):
        """Build a record from a header -> value mapping."""
        things = json.loads(row.get("things") or "[]")
        return cls(
            run_id=row["run_id"],
            status=row["status"],
            action_count=int(row["actions"] or 0),
            items=[ExtractedItem(name=t["name"], id=str(t["id"])) for t in things],
            timestamp=row["timestamp"],
        )


def append_run(record, path="run_history.csv"):
    new_file = not os.path.exists(path)

    with open(path, "a", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if new_file:
            writer.writerow(LEDGER_HEADER)
        writer.writerow(record.to_row())

    logger.info(f"Run details written to {path}.")


def read_latest_run(path="run_history.csv"):
    """Return the most recent RunRecord, or None if the ledger has no runs."""
    if not os.path.exists(path):
        return None

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        return None

    if df.empty:
        return None

    latest = dict(zip(df.columns, df.iloc[-1].tolist()))
    return RunRecord.from_row(latest)


def format_run_summary(record):
    lines = [
        "=== Latest Run Details ===",
        f"Timestamp:  {record.timestamp}",
        f"Run ID:     {record.run_id}",
        f"Status:     {record.status}",
        f"Actions:    {record.action_count}",
        "Data:",
    ]
    for i, item in enumerate(record.items, 1):
        lines.append(f"  {i}. {item.name} (ID: {item.id})")
    lines.append("=" * 27)
    return "\n".join(lines)


def print_latest_run(path="run_history.csv"):
    record = read_latest_run(path)
    name = os.path.basename(path)

    if record is None:
        logger.warning(f"No runs found in {name}.")
        print(f"\nNo runs found in {name}.\n")
        return None

    logger.info("Latest Run Details:")
    print("\n" + format_run_summary(record) + "\n")
    return record
