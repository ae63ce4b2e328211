"""
Drive one Dimension integration run end to end.

login -> start (or find) the run -> poll status -> export CSV -> ledger -> summary.
The browser is always closed before returning, whatever happened in between.
"""

import logging
import time
import uuid

import dimension_ui
from csv_export import process_export
from run_history import RunRecord, append_run, print_latest_run, utc_timestamp
from status_poller import ActionLog, StatusTimeout, wait_for_terminal_status

logger = logging.getLogger(__name__)

TIMEOUT_STATUS = "TIMEOUT"


class IntegrationRunner:
    def __init__(self, settings, driver_factory=None, sleep=time.sleep, clock=time.monotonic):
        self.settings = settings
        self.driver_factory = driver_factory or dimension_ui.setup_browser
        self.sleep = sleep
        self.clock = clock

    def _banner(self, *lines):
        print("=" * 60)
        for line in lines:
            print(line)
        print("=" * 60)

    def run_integration_and_report(self, run_id=None):
        run_id = run_id or str(uuid.uuid4())
        self._banner(
            "Integration Run Started",
            f"Timestamp: {utc_timestamp()}",
            f"Generated Run ID: {run_id}",
        )

        driver = self.driver_factory(self.settings)
        logger.info("Browser launched.")
        try:
            dimension_ui.login(driver, self.settings)
            dimension_ui.open_integrations(driver, self.settings.element_timeout)
            dimension_ui.start_integration(driver, run_id, self.settings)
            return self.handle_post_run_actions(driver, run_id)
        finally:
            driver.quit()
            logger.info("Browser closed. Integration run finished.")

    def run_report_on_existing_integration(self, run_id):
        self._banner(f"Running report for existing Run ID: {run_id}")

        driver = self.driver_factory(self.settings)
        logger.info("Browser launched.")
        try:
            dimension_ui.login(driver, self.settings)
            dimension_ui.locate_integration(driver, run_id, self.settings)
            return self.handle_post_run_actions(driver, run_id)
        finally:
            driver.quit()
            logger.info("Browser closed. Report run finished.")

    def handle_post_run_actions(self, driver, run_id):
        settings = self.settings
        dimension_ui.set_page_size(driver, settings.page_size)

        logger.info("Waiting for the Run Details status to update to 'Errored' or 'Complete'...")
        action_log = ActionLog()
        try:
            status = wait_for_terminal_status(
                lambda: dimension_ui.read_status(driver),
                on_tick=lambda: action_log.record(dimension_ui.read_table_rows(driver)),
                timeout=settings.status_timeout,
                interval=settings.poll_interval,
                clock=self.clock,
                sleep=self.sleep,
            )
        except StatusTimeout:
            logger.error(f"Run {run_id} timed out waiting for completion.")
            record = RunRecord(run_id=run_id, status=TIMEOUT_STATUS)
        else:
            record = self.export_and_process_csv(driver, run_id, status)

        append_run(record, settings.ledger_path)
        print_latest_run(settings.ledger_path)
        return record

    def export_and_process_csv(self, driver, run_id, status):
        total_actions = dimension_ui.read_total_actions(driver)
        dimension_ui.toggle_filters(driver)

        dimension_ui.click_export(driver)
        self.sleep(self.settings.export_settle)

        things = process_export(self.settings.export_path)
        logger.info(f"Extracted {len(things)} things from the export.")
        return RunRecord(run_id=run_id, status=status, action_count=total_actions, items=things)
