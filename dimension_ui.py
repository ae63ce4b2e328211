"""
Selenium helpers for the Dimension web UI.

Every selector the runner depends on lives in this module. Functions take a
WebDriver and either act on the page or return plain Python values.
"""

import logging
import os
import re

from selenium import webdriver
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

logger = logging.getLogger(__name__)

# === SELECTORS ===
USER_FIELD = (By.ID, "user_id")
PASSWORD_FIELD = (By.ID, "password")
SIGN_IN_BUTTON = (By.XPATH, "//button[normalize-space()='Sign in with Dimension']")
INTEGRATIONS_LINK = (By.CSS_SELECTOR, "a[href='/integrations']")
IDENTIFIER_FIELD = (By.CSS_SELECTOR, "input[placeholder='My Identifier']")
RUN_LIVE_BUTTON = (By.ID, "runLiveBtn-0")
SEARCH_FIELD = (By.ID, "name")
PAGE_SIZE_SELECT = (By.XPATH, "//select[contains(@style, 'width: 50px')]")
RESULTS_TABLE = (By.ID, "reactTable")
RESULTS_ROWS = (By.CSS_SELECTOR, "#reactTable tbody tr")
STATUS_HEADER = (By.CSS_SELECTOR, "h3[class*='RunDetails_statusHeader']")
PAGER_TEXT = (By.XPATH, "//div[contains(text(), 'Showing items')]")
EXPORT_BUTTON = (By.CSS_SELECTOR, "button[class*='ExportCsv_exportBtn']")

BADGE_IDS = ["deletedBadge", "erroredBadge", "warningBadge"]

BROWSER_ARGS = [
    "--headless=new",
    "--disable-gpu",
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--window-size=1920,1080",
]


def setup_browser(settings):
    """Open Chrome with downloads going straight to settings.download_dir"""
    os.makedirs(settings.download_dir, exist_ok=True)

    options = webdriver.ChromeOptions()
    if settings.headless:
        for arg in BROWSER_ARGS:
            options.add_argument(arg)
    options.add_experimental_option("prefs", {
        "download.default_directory": os.path.abspath(settings.download_dir),
        "download.prompt_for_download": False,
    })
    return webdriver.Chrome(options=options)


def _find(driver, locator, timeout):
    return WebDriverWait(driver, timeout).until(EC.presence_of_element_located(locator))


def _set_text(driver, locator, value, timeout):
    field = _find(driver, locator, timeout)
    field.clear()
    field.send_keys(value)


def _click_when_enabled(driver, locator, timeout):
    button = _find(driver, locator, timeout)
    WebDriverWait(driver, timeout).until(lambda d: button.is_enabled())
    button.click()


def _click_run_link(driver, run_id, timeout):
    link = WebDriverWait(driver, timeout).until(
        EC.visibility_of_element_located((By.PARTIAL_LINK_TEXT, run_id))
    )
    link.click()


def login(driver, settings):
    logger.info("Navigating to the login page...")
    driver.get(settings.base_url)

    logger.info("Attempting to log in...")
    _set_text(driver, USER_FIELD, settings.username, settings.element_timeout)
    _set_text(driver, PASSWORD_FIELD, settings.password, settings.element_timeout)
    _click_when_enabled(driver, SIGN_IN_BUTTON, settings.element_timeout)


def open_integrations(driver, timeout=15):
    logger.info("Navigating to the integrations page...")
    _find(driver, INTEGRATIONS_LINK, timeout).click()


def start_integration(driver, run_id, settings):
    """Launch the 'Take a while and do things' integration tagged with run_id."""
    logger.info("Running 'Take a while and do things' integration...")
    _set_text(driver, IDENTIFIER_FIELD, run_id, settings.element_timeout)
    _click_when_enabled(driver, RUN_LIVE_BUTTON, settings.element_timeout)
    _click_run_link(driver, run_id, settings.link_timeout)


def locate_integration(driver, run_id, settings):
    logger.info(f"Searching for the existing Run ID: {run_id}...")
    _set_text(driver, SEARCH_FIELD, run_id, settings.element_timeout)
    logger.info(f"Clicking the search result for Run ID: {run_id}...")
    _click_run_link(driver, run_id, settings.link_timeout)


def set_page_size(driver, size, timeout=30):
    logger.info(f"Setting table page size to {size}...")
    Select(_find(driver, PAGE_SIZE_SELECT, timeout)).select_by_visible_text(str(size))
    _find(driver, RESULTS_TABLE, timeout)
    logger.info(f"Page size set to {size}.")


def read_status(driver, timeout=15):
    """Status header text; "" when the header re-renders mid-read."""
    try:
        return _find(driver, STATUS_HEADER, timeout).text
    except StaleElementReferenceException:
        logger.debug("Status header re-rendered during read")
        return ""


def read_table_rows(driver):
    """Return (time, type, description) for every row in the results table.

    The table re-renders while the job is running, so a row that goes stale
    mid-scan ends the scan early; the next poll picks it up.
    """
    rows = []
    try:
        for tr in driver.find_elements(*RESULTS_ROWS):
            cells = tr.find_elements(By.TAG_NAME, "td")
            if len(cells) < 3:
                continue
            rows.append((cells[0].text, cells[1].text, cells[2].text))
    except StaleElementReferenceException:
        logger.debug("Results table re-rendered during scan")
    return rows


def parse_total_actions(pager_text):
    """'Showing items 1-25 of 137' -> 137"""
    match = re.search(r"of ([0-9]+)", pager_text)
    if not match:
        raise ValueError(f"No action count in pager text: {pager_text!r}")
    return int(match.group(1))


def read_total_actions(driver):
    total = parse_total_actions(driver.find_element(*PAGER_TEXT).text)
    logger.info(f"Total actions: {total}")
    return total


def toggle_filters(driver):
    """Click the deleted/errored/warning badges; absent badges are skipped."""
    toggled = []
    for badge_id in BADGE_IDS:
        badges = driver.find_elements(By.ID, badge_id)
        if badges and badges[0].is_displayed():
            badges[0].click()
            name = re.sub(r"Badge$", "", badge_id).capitalize()
            logger.info(f"Toggled filter: {name}")
            toggled.append(name)
    return toggled


def click_export(driver):
    logger.info("Exporting CSV data...")
    buttons = driver.find_elements(*EXPORT_BUTTON)
    if buttons and buttons[0].is_displayed():
        buttons[0].click()
        return True
    logger.warning("Export button not found; no CSV was requested.")
    return False
