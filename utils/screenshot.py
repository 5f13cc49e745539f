"""Screenshot utility for debugging failed browser tests"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger
from selenium.webdriver.remote.webdriver import WebDriver


def _sanitize(context: str) -> str:
    context_part = context.replace(" ", "_").replace("/", "-").replace("\\", "-")[:50] if context else "error"
    return "".join(c for c in context_part if c.isalnum() or c in "_-")


class ScreenshotManager:
    """Captures screenshots and page source into a run folder"""

    def __init__(self, driver: WebDriver, log_folder_path: str | Path):
        self.driver = driver
        self.log_folder_path = Path(log_folder_path)
        self.screenshots_dir = self.log_folder_path / "screenshots"
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)

    def capture_error_screenshot(self, error_context: str = "", exception: Optional[BaseException] = None) -> str:
        """
        Capture screenshot when a test step fails

        Args:
            error_context: Description of what was happening when the failure occurred
            exception: The exception that was raised (optional)

        Returns:
            Path to the saved screenshot file, or "" if nothing was saved
        """
        if not self.driver:
            logger.error("No driver available for screenshot capture")
            return ""

        self.screenshots_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        filename = f"error_{timestamp}_{_sanitize(error_context)}.png"
        filepath = self.screenshots_dir / filename

        try:
            success = self.driver.save_screenshot(str(filepath))
        except Exception as screenshot_error:
            # The browser may already be gone when a test fails hard.
            logger.error(f"Failed to capture screenshot: {type(screenshot_error).__name__}: {screenshot_error}")
            return ""

        if not success:
            logger.error(f"Screenshot save returned: {success}")
            return ""

        log_msg = f"Screenshot captured: {filename}"
        if error_context:
            log_msg += f" | Context: {error_context}"
        if exception:
            log_msg += f" | Exception: {type(exception).__name__}: {exception}"
        logger.info(log_msg)
        return str(filepath)

    def capture_page_source(self, error_context: str = "") -> str:
        """Save the current DOM next to the screenshots."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
        filepath = self.screenshots_dir / f"page_source_{timestamp}_{_sanitize(error_context)}.html"

        try:
            filepath.write_text(self.driver.page_source, encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to save page source: {e}")
            return ""
        logger.debug(f"Page source saved: {filepath.name}")
        return str(filepath)
