"""
Poll a run's status text until it reaches a terminal value.
"""

import logging
import time

logger = logging.getLogger(__name__)

TERMINAL_MARKERS = ("Errored", "Complete")


class StatusTimeout(TimeoutError):
    def __init__(self, timeout, last_status):
        super().__init__(f"Status not terminal after {timeout}s (last: {last_status!r})")
        self.timeout = timeout
        self.last_status = last_status


def is_terminal(status):
    return any(marker in (status or "") for marker in TERMINAL_MARKERS)


def wait_for_terminal_status(read_status, on_tick=None, timeout=300, interval=1,
                             clock=time.monotonic, sleep=time.sleep):
    """Call read_status() every `interval` seconds until it is terminal.

    on_tick runs after each read and does not affect the result.
    Raises StatusTimeout once `timeout` seconds pass without a terminal status.
    """
    deadline = clock() + timeout
    while True:
        status = read_status()
        if on_tick is not None:
            on_tick()

        if is_terminal(status):
            logger.info(f"Run status confirmed: {status}")
            return status

        if clock() >= deadline:
            raise StatusTimeout(timeout, status)
        sleep(interval)


class ActionLog:
    """Logs each (time, description) pair from the results table once per run."""

    def __init__(self):
        self.seen = set()

    def record(self, rows):
        new_rows = []
        for row_time, row_type, description in rows:
            key = f"{row_time}-{description}"
            if key in self.seen:
                continue
            self.seen.add(key)
            logger.info(f"[ACTION] Type: {row_type}, Description: {description}")
            new_rows.append((row_time, row_type, description))
        return new_rows
