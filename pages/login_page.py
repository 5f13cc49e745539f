from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from loguru import logger

from pages.common_page import CommonPage
from utils.screenshot import ScreenshotManager
from utils.settings import get_settings


class LoginFailedError(Exception):
    pass


class LoginPage:
    # Locators
    USERNAME_INPUT = (By.ID, "user")
    PASSWORD_INPUT = (By.ID, "password")
    LOGIN_BUTTON = (By.ID, "login")
    USER_LABEL = (By.CSS_SELECTOR, 'label[for="user"]')
    PASSWORD_LABEL = (By.CSS_SELECTOR, 'label[for="password"]')
    ERROR_MESSAGE = (By.CSS_SELECTOR, "p.error.incorrect")

    def __init__(self, driver, screenshot_manager: ScreenshotManager | None = None):
        self.driver = driver
        self.screenshot_manager = screenshot_manager
        self.settings = get_settings()
        self.timeout = self.settings.wait_timeout

    @staticmethod
    def locale(language_code: str):
        return (By.CSS_SELECTOR, f'.locale[name="{language_code}"]')

    def navigate_to_login(self):
        self.driver.get(f"{self.settings.cht_url}/medic/login")
        WebDriverWait(self.driver, self.timeout).until(
            EC.presence_of_element_located(self.USERNAME_INPUT)
        )

    def change_language(self, language_code: str, user_translation: str) -> dict:
        """Switch the login page locale and wait for the translated user label."""
        if not self.driver.find_elements(*self.USERNAME_INPUT):
            self.navigate_to_login()

        WebDriverWait(self.driver, self.timeout).until(
            EC.element_to_be_clickable(self.locale(language_code))
        ).click()
        WebDriverWait(self.driver, self.timeout).until(
            lambda driver: driver.find_element(*self.USER_LABEL).text == user_translation
        )
        labels = {
            "user": self.driver.find_element(*self.USER_LABEL).text,
            "password": self.driver.find_element(*self.PASSWORD_LABEL).text,
        }
        logger.info(f"Login page language changed to {language_code}")
        return labels

    def _visible_error(self):
        for error in self.driver.find_elements(*self.ERROR_MESSAGE):
            if error.is_displayed():
                return error
        return None

    def login(self, user: dict, load_page: bool = True):
        if not self.driver.find_elements(*self.USERNAME_INPUT):
            self.navigate_to_login()

        username_input = self.driver.find_element(*self.USERNAME_INPUT)
        username_input.clear()
        username_input.send_keys(user["username"])

        password_input = self.driver.find_element(*self.PASSWORD_INPUT)
        password_input.clear()
        password_input.send_keys(user["password"])

        self.driver.find_element(*self.LOGIN_BUTTON).click()

        # Either the app shell or the error paragraph settles the attempt
        WebDriverWait(self.driver, self.timeout).until(
            EC.any_of(
                EC.visibility_of_element_located(self.ERROR_MESSAGE),
                EC.presence_of_element_located(CommonPage.APP_ROOT),
            )
        )
        error = self._visible_error()

        if error is not None:
            logger.error(f"Login error message: {error.text}")
            if self.screenshot_manager:
                self.screenshot_manager.capture_error_screenshot("login_failure")
            raise LoginFailedError(f"Login failed for {user['username']}: {error.text}")

        if load_page:
            CommonPage(self.driver).wait_for_page_loaded()
        logger.info(f"Logged in as {user['username']}")
        return True
