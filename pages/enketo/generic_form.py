from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from loguru import logger

from utils.settings import get_settings


class GenericForm:
    SELECT2_SELECTION = (By.CSS_SELECTOR, "#report-form .select2-selection")
    SELECT2_SEARCH = (By.CSS_SELECTOR, ".select2-search__field")
    SELECT2_RESULT_NAME = (By.CSS_SELECTOR, ".select2-results__option .name")
    NEXT_PAGE_BUTTON = (By.CSS_SELECTOR, "#report-form .btn.next-page")
    CURRENT_PAGE = (By.CSS_SELECTOR, "#report-form .or-page.current")

    def __init__(self, driver):
        self.driver = driver
        self.timeout = get_settings().wait_timeout

    def _wait(self):
        return WebDriverWait(self.driver, self.timeout)

    def select_contact(self, contact_name: str, search_term: str = ""):
        self._wait().until(EC.element_to_be_clickable(self.SELECT2_SELECTION)).click()
        search_field = self._wait().until(EC.visibility_of_element_located(self.SELECT2_SEARCH))
        search_field.send_keys(search_term or contact_name)
        self._wait().until(EC.element_to_be_clickable(self.SELECT2_RESULT_NAME)).click()

        expected = contact_name.lower()
        self._wait().until(
            lambda driver: driver.find_element(*self.SELECT2_SELECTION).text.lower().endswith(expected)
        )
        logger.debug(f"Selected contact {contact_name}")

    def get_selected_contact(self) -> str:
        return self.driver.find_element(*self.SELECT2_SELECTION).text

    def next_page(self):
        """Move to the next form page once Enketo has swapped the current one."""
        current_page = self.driver.find_element(*self.CURRENT_PAGE)
        self._wait().until(EC.element_to_be_clickable(self.NEXT_PAGE_BUTTON)).click()
        self._wait().until(lambda driver: driver.find_element(*self.CURRENT_PAGE) != current_page)
        logger.debug("Moved to the next form page")
