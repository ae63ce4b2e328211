"""
Parse the exported run CSV into the Things it created.
"""

import csv
import logging
import os
import re

from run_history import ExtractedItem

logger = logging.getLogger(__name__)

THING_MARKER = "Thing:"
THING_PATTERN = re.compile(r"Thing:\s*([0-9]+)")


def flatten_description(description):
    """Join a multi-line Description cell into one line"""
    return re.sub(r"\r?\n", " ", description or "")


def extract_things(path):
    things = []
    with open(path, "r", newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for row in reader:
            description = flatten_description(row.get("Description"))
            if THING_MARKER not in description:
                continue

            match = THING_PATTERN.search(description)
            if match:
                thing_id = match.group(1)
                things.append(ExtractedItem(name=f"Thing {thing_id}", id=thing_id))
    return things


def delete_temp_csv(path):
    if os.path.exists(path):
        os.remove(path)
        logger.info(f"Temporary CSV file {path} deleted.")
    else:
        logger.warning(f"Temporary CSV file {path} not found.")


def process_export(path):
    """Extract Things from the export, removing the file afterwards."""
    try:
        logger.info("Processing exported CSV data...")
        return extract_things(path)
    finally:
        delete_temp_csv(path)
