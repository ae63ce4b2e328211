"""
Settings for the Dimension integration runner.

Values come from the environment (a local .env file is loaded first), falling
back to the demo tenant defaults below.
"""

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

# === DEFAULTS ===
DEFAULT_BASE_URL = "https://demo-dimension.calance.us"
DEFAULT_USERNAME = "test_2024"
DEFAULT_PASSWORD = "Test$12345"

STATUS_TIMEOUT = 300  # seconds
POLL_INTERVAL = 1
EXPORT_SETTLE = 5
PAGE_SIZE = 250


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(name, default, cast=float):
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return cast(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    headless: bool = True
    download_dir: str = field(default_factory=lambda: os.path.join(os.getcwd(), "data"))
    export_filename: str = "data.csv"
    ledger_path: str = "run_history.csv"
    status_timeout: float = STATUS_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    export_settle: float = EXPORT_SETTLE
    element_timeout: float = 15
    link_timeout: float = 20
    page_size: int = PAGE_SIZE
    log_level: str = "INFO"

    @property
    def export_path(self):
        return os.path.join(self.download_dir, self.export_filename)


def load_settings(env_file=None):
    """Build Settings from DIMENSION_* environment variables."""
    load_dotenv(env_file or find_dotenv(usecwd=True))

    defaults = Settings()
    return Settings(
        base_url=os.getenv("DIMENSION_BASE_URL", defaults.base_url).rstrip("/"),
        username=os.getenv("DIMENSION_USERNAME", defaults.username),
        password=os.getenv("DIMENSION_PASSWORD", defaults.password),
        headless=_env_bool("DIMENSION_HEADLESS", defaults.headless),
        download_dir=os.getenv("DIMENSION_DOWNLOAD_DIR", defaults.download_dir),
        export_filename=os.getenv("DIMENSION_EXPORT_FILENAME", defaults.export_filename),
        ledger_path=os.getenv("DIMENSION_LEDGER_PATH", defaults.ledger_path),
        status_timeout=_env_number("DIMENSION_STATUS_TIMEOUT", defaults.status_timeout),
        poll_interval=_env_number("DIMENSION_POLL_INTERVAL", defaults.poll_interval),
        export_settle=_env_number("DIMENSION_EXPORT_SETTLE", defaults.export_settle),
        element_timeout=_env_number("DIMENSION_ELEMENT_TIMEOUT", defaults.element_timeout),
        link_timeout=_env_number("DIMENSION_LINK_TIMEOUT", defaults.link_timeout),
        page_size=_env_number("DIMENSION_PAGE_SIZE", defaults.page_size, cast=int),
        log_level=os.getenv("DIMENSION_LOG_LEVEL", defaults.log_level).upper(),
    )
