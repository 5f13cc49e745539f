import sys
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..'))

# Add the project root to the system path
sys.path.insert(0, project_root)

from selenium.common.exceptions import WebDriverException

from utils.screenshot import ScreenshotManager


class TestScreenshotManager(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.driver = MagicMock()
        self.driver.page_source = '<html><body id="report-form"></body></html>'
        self.manager = ScreenshotManager(self.driver, self.tmp.name)

    def test_screenshot_name_is_sanitised(self):
        self.driver.save_screenshot.return_value = True

        path = self.manager.capture_error_screenshot("test_repeat_form.TestRepeatFormWithCount/nepali")

        self.assertTrue(path.endswith(".png"))
        self.assertIn("test_repeat_formTestRepeatFormWithCount-nepali", Path(path).name)
        self.assertEqual(Path(path).parent, Path(self.tmp.name) / "screenshots")

    def test_driver_failure_returns_empty_path(self):
        self.driver.save_screenshot.side_effect = WebDriverException("session deleted")

        self.assertEqual(self.manager.capture_error_screenshot("login"), "")

    def test_page_source_is_written(self):
        path = self.manager.capture_page_source("cascading select")

        self.assertEqual(Path(path).read_text(encoding="utf-8"), self.driver.page_source)


if __name__ == '__main__':
    unittest.main()
