from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import TimeoutException
from loguru import logger

from utils.settings import get_settings


class CommonPage:
    APP_ROOT = (By.CSS_SELECTOR, ".header .header-logo, #header-dropdown-link")
    LOADER = (By.CSS_SELECTOR, ".content .loader, .app-root .loader")
    REPORTS_TAB = (By.ID, "reports-tab")
    REPORT_FORM = (By.CSS_SELECTOR, "#report-form form.or")

    FAST_ACTION_FAB = (By.CSS_SELECTOR, ".fast-action-trigger .fast-action-fab-button")
    RIGHT_PANE_ACTION = (By.CSS_SELECTOR, ".fast-action-flat-button")

    def __init__(self, driver, timeout: int | None = None):
        self.driver = driver
        self.settings = get_settings()
        self.timeout = timeout or self.settings.wait_timeout

    def _wait(self, timeout: int | None = None):
        return WebDriverWait(self.driver, timeout or self.timeout)

    def wait_for_page_loaded(self):
        self._wait().until(EC.presence_of_element_located(self.APP_ROOT))
        self._wait().until(EC.invisibility_of_element_located(self.LOADER))
        logger.debug(f"Page loaded: {self.driver.current_url}")

    def go_to_url(self, path: str):
        self.driver.get(f"{self.settings.cht_url}{path}")

    def go_to_reports(self):
        self.go_to_url("/#/reports")
        self.wait_for_page_loaded()
        self._wait().until(EC.presence_of_element_located(self.REPORTS_TAB))

    def _fast_action_item(self, form_id: str):
        return (By.CSS_SELECTOR, f".fast-action-item[test-id='{form_id}'], .fast-action-item[data-id='form:{form_id}']")

    def open_fast_action_report(self, form_id: str, right_side_action: bool = True):
        """Open the new-report menu and start `form_id`.

        `right_side_action` picks the right-pane action button over the
        floating action button.
        """
        self.wait_for_page_loaded()
        trigger = self.RIGHT_PANE_ACTION if right_side_action else self.FAST_ACTION_FAB
        self._wait().until(EC.element_to_be_clickable(trigger)).click()
        self._wait().until(EC.element_to_be_clickable(self._fast_action_item(form_id))).click()
        self._wait().until(EC.visibility_of_element_located(self.REPORT_FORM))
        logger.info(f"Opened report form {form_id}")

    def is_report_form_displayed(self) -> bool:
        try:
            self._wait(2).until(EC.visibility_of_element_located(self.REPORT_FORM))
            return True
        except TimeoutException:
            return False
