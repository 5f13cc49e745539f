from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from loguru import logger

from utils.settings import get_settings


class ReportsPage:
    def __init__(self, driver):
        self.driver = driver
        self.timeout = get_settings().wait_timeout

    def set_date_input(self, element, date: str):
        """Type an ISO date into the visible widget that backs a hidden Enketo date input."""
        widget = element.find_element(By.XPATH, "following-sibling::div[contains(@class, 'widget')]")
        visible_input = widget.find_element(By.CSS_SELECTOR, "input[type='text']")
        visible_input.clear()
        visible_input.send_keys(date + Keys.TAB)
        logger.debug(f"Date input {element.get_attribute('name')} set to {date}")

    def get_report_field_value(self, field_label: str) -> str:
        """Read the value shown under a report-detail label such as `report.DD.patient_name`."""
        element = WebDriverWait(self.driver, self.timeout).until(
            EC.presence_of_element_located(
                (By.XPATH, f'//*[text()="{field_label}"]/../../p')
            )
        )
        return element.text
