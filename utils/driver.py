"""Chrome WebDriver factory for the e2e suites."""

from loguru import logger
from selenium import webdriver

from utils.settings import Settings, get_settings

WINDOW_SIZE = "1280,1024"
REMOTE_DEBUG_PORT = 9222


def create_chrome_driver(settings: Settings | None = None) -> webdriver.Chrome:
    """Create and configure Chrome WebDriver based on environment settings.

    Args:
        settings: Run settings, defaults to the environment-derived ones

    Returns:
        Configured Chrome WebDriver instance
    """
    settings = settings or get_settings()

    options = webdriver.ChromeOptions()
    options.add_argument(f"--window-size={WINDOW_SIZE}")
    options.add_argument("--lang=en")

    if settings.headless:
        options.add_argument('--headless=new')
        options.add_argument('--no-sandbox')
        options.add_argument('--disable-dev-shm-usage')
    else:
        options.add_argument(f"--remote-debugging-port={REMOTE_DEBUG_PORT}")

    logger.debug(f"Starting Chrome (headless={settings.headless})")
    return webdriver.Chrome(options=options)
