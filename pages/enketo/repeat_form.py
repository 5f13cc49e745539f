from typing import Tuple

from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import TimeoutException
from loguru import logger

from pages.common_page import CommonPage
from utils.settings import get_settings


class RepeatFormPage:
    """Helpers for the repeat-translation forms (count input, add button, cascading select)."""

    SELECTOR_PREFIX = "#report-form .active"
    STATE_LABEL = f'{SELECTOR_PREFIX}.question-label[data-itext-id="/repeat_translation/basic/state_1:label"]'
    CITY_LABEL = f'{SELECTOR_PREFIX}.question-label[data-itext-id="/repeat_translation/basic/rep/city_1:label"]'
    MELBOURNE_LABEL = f'{SELECTOR_PREFIX}[data-itext-id="/repeat_translation/basic/rep/city_1/melbourne:label"]'
    COUNT_INPUT = f'{SELECTOR_PREFIX}[data-itext-id="/repeat_translation/basic/count:label"] ~ input'
    ADD_REPEAT_BUTTON = ".btn.btn-default.add-repeat-btn"

    CASCADING_SELECT_PATH = "/cascading_select"

    def __init__(self, driver, timeout: int | None = None):
        self.driver = driver
        self.timeout = timeout or get_settings().wait_timeout

    def _wait(self):
        return WebDriverWait(self.driver, self.timeout)

    def _find(self, selector: str) -> WebElement:
        return self._wait().until(EC.presence_of_element_located((By.CSS_SELECTOR, selector)))

    def open_repeat_form(self, form_id: str):
        common_page = CommonPage(self.driver, self.timeout)
        common_page.go_to_reports()
        common_page.open_fast_action_report(form_id, right_side_action=False)

    def get_state_label_text(self) -> str:
        return self._find(self.STATE_LABEL).text

    def get_count_value(self) -> str:
        return self._find(self.COUNT_INPUT).get_attribute("value")

    def assert_labels(self, selector: str, count: int, label_text: str):
        """Assert that exactly `count` elements match `selector`, each reading `label_text`.

        Waits for the match count to settle first, since Enketo adds and
        removes repeat instances asynchronously.
        """
        try:
            self._wait().until(
                lambda driver: len(driver.find_elements(By.CSS_SELECTOR, selector)) == count
            )
        except TimeoutException:
            found = len(self.driver.find_elements(By.CSS_SELECTOR, selector))
            raise AssertionError(f"Expected {count} elements for {selector!r}, found {found}") from None

        labels = self.driver.find_elements(By.CSS_SELECTOR, selector)
        for index, label in enumerate(labels):
            text = label.text
            if text != label_text:
                raise AssertionError(
                    f"Element {index} for {selector!r} reads {text!r}, expected {label_text!r}"
                )
        logger.debug(f"{count} x {label_text!r} found for {selector}")

    def repeat_form_by_count(self, count: int):
        input_count = self._find(self.COUNT_INPUT)
        input_count.clear()
        input_count.send_keys(str(count))
        # Clicking elsewhere blurs the input, which fires Enketo's change listener.
        self._find(self.STATE_LABEL).click()

        value = input_count.get_attribute("value")
        if value != str(count):
            raise AssertionError(f"Repeat count input reads {value!r}, expected {str(count)!r}")
        logger.debug(f"Repeat count set to {count}")

    def repeat_form_by_button(self, times: int = 1):
        for _ in range(times):
            self._wait().until(
                EC.element_to_be_clickable((By.CSS_SELECTOR, self.ADD_REPEAT_BUTTON))
            ).click()
        logger.debug(f"Add repeat clicked {times} time(s)")

    def get_field(self, field_name: str, field_value: str) -> Tuple[WebElement, WebElement]:
        """Return the (input, active label) pair of a cascading select option."""
        input_path = f'#report-form input[name="{self.CASCADING_SELECT_PATH}/{field_name}"][value="{field_value}"]'
        label_path = f"{input_path} ~ .option-label.active"
        field_input = self._find(input_path)
        field_label = self.driver.find_element(By.CSS_SELECTOR, label_path)
        return field_input, field_label

    def get_field_values(self, field_name: str) -> set:
        """Values of the options currently rendered for a cascading select field."""
        # itemset templates carry the same input name but are never shown
        options_path = (
            f'#report-form label:not(.itemset-template) > input[name="{self.CASCADING_SELECT_PATH}/{field_name}"]'
        )
        inputs = self.driver.find_elements(By.CSS_SELECTOR, options_path)
        return {field_input.get_attribute("value") for field_input in inputs} - {None, ""}

    def assert_field_values(self, field_name: str, expected_values):
        """Assert that exactly `expected_values` are offered for `field_name`."""
        expected = set(expected_values)
        try:
            self._wait().until(lambda driver: self.get_field_values(field_name) == expected)
        except TimeoutException:
            found = sorted(self.get_field_values(field_name))
            raise AssertionError(
                f"Expected options {sorted(expected)} for {field_name!r}, found {found}"
            ) from None
        logger.debug(f"{field_name} offers {sorted(expected)}")
