from datetime import date as Date
from pathlib import Path
from typing import Optional

from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from loguru import logger

from pages.enketo.generic_form import GenericForm
from pages.reports_page import ReportsPage
from utils.cht_api import ChtApi
from utils.documents import FormDocument, build_form_document
from utils.settings import get_settings

FORM_ID = "delivery"
FORM_DOC_ID = "form:dd"
FORM_INTERNAL_ID = "DD"
FORM_TITLE = "Default Delivery"

DEAD_BABY_SECTION = f"/{FORM_ID}/baby_death"
DEAD_BABY_REPEAT = f"{DEAD_BABY_SECTION}/baby_death_repeat"
ALIVE_BABY_SECTION = f"/{FORM_ID}/babys_condition"
ALIVE_BABY_REPEAT = f"{ALIVE_BABY_SECTION}/baby_repeat/baby_details"

DANGER_SIGNS = [
    'infected_umbilical_cord',
    'convulsion',
    'difficulty_feeding',
    'vomit',
    'drowsy',
    'stiff',
    'yellow_skin',
    'fever',
    'blue_skin',
]

POSTNATAL_DANGER_SIGNS = [
    'fever',
    'severe_headache',
    'vaginal_bleeding',
    'vaginal_discharge',
    'convulsion',
]


def get_yn_value(value: bool) -> str:
    return 'yes' if value else 'no'


def delivery_form_path(config_dir: Optional[Path] = None) -> Path:
    config_dir = config_dir or get_settings().cht_config_dir
    if config_dir is None:
        raise FileNotFoundError("CHT_CONFIG_DIR is not set; cannot locate delivery.xml")
    return Path(config_dir) / "forms" / "app" / f"{FORM_ID}.xml"


def load_form_document(config_dir: Optional[Path] = None) -> FormDocument:
    xml = delivery_form_path(config_dir).read_bytes()
    return build_form_document(xml, FORM_DOC_ID, FORM_INTERNAL_ID, FORM_TITLE)


def configure_form(user_contact_doc: dict, api: Optional[ChtApi] = None, config_dir: Optional[Path] = None):
    """Seed the delivery form and the user's contact."""
    api = api or ChtApi()
    api.seed_test_data(user_contact_doc, [load_form_document(config_dir).to_doc()])


class DeliveryReportPage:
    def __init__(self, driver):
        self.driver = driver
        self.timeout = get_settings().wait_timeout
        self.generic_form = GenericForm(driver)
        self.reports_page = ReportsPage(driver)

    def _wait(self):
        return WebDriverWait(self.driver, self.timeout)

    def _repeat_section(self, section_path: str, repeat_path: str, index: int):
        self._wait().until(
            EC.visibility_of_element_located((By.CSS_SELECTOR, f'section[name="{repeat_path}"]'))
        )
        parent_section = self.driver.find_element(By.CSS_SELECTOR, f'section[name="{section_path}"]')
        repeat_number = parent_section.find_element(
            By.XPATH, f'.//*[contains(@class, "repeat-number") and contains(text(), "{index}")]'
        )
        return repeat_number.find_element(By.XPATH, "..")

    def _click_option(self, section, data_name: str, value: str):
        section.find_element(By.CSS_SELECTOR, f'[data-name="{data_name}"][value="{value}"]').click()

    def select_patient_name(self, name: str):
        self.generic_form.select_contact(name)

    def select_option(self, question: str, value: str):
        """Answer a radio question such as `condition/woman_outcome` on the current page."""
        self._wait().until(
            EC.element_to_be_clickable(
                (By.CSS_SELECTOR, f'[data-name="/{FORM_ID}/{question}"][value="{value}"]')
            )
        ).click()

    def select_woman_outcome(self, outcome: str = 'alive_well'):
        self.select_option('condition/woman_outcome', outcome)

    def select_postnatal_danger_signs(self, present: bool = False):
        for danger_sign in POSTNATAL_DANGER_SIGNS:
            self.select_option(f'pnc_danger_sign_check/{danger_sign}', get_yn_value(present))

    def populate_delivery_outcome(
        self, babies_delivered: int, babies_alive: int, date: Optional[Date] = None,
        place: str = 'health_facility', mode: str = 'vaginal'
    ):
        # the radio list stops at 3; larger deliveries go through the free-text count
        if babies_delivered <= 3:
            self.select_option('delivery_outcome/babies_delivered', str(babies_delivered))
        else:
            self.select_option('delivery_outcome/babies_delivered', 'other')
            self.select_no_of_babies_delivered(babies_delivered)
        self.select_option('delivery_outcome/babies_alive', str(babies_alive))

        date_input = self.driver.find_element(By.CSS_SELECTOR, f'[name="/{FORM_ID}/delivery_outcome/delivery_date"]')
        self.reports_page.set_date_input(date_input, (date or Date.today()).isoformat())
        self.select_option('delivery_outcome/delivery_place', place)
        self.select_option('delivery_outcome/delivery_mode', mode)
        logger.debug(f"Delivery outcome: {babies_delivered} delivered, {babies_alive} alive")

    def get_repeat_count(self, repeat_path: str) -> int:
        return len(self.driver.find_elements(By.CSS_SELECTOR, f'section[name="{repeat_path}"]'))

    def select_no_of_babies_delivered(self, value):
        field = self._wait().until(
            EC.visibility_of_element_located(
                (By.CSS_SELECTOR, f'[name="/{FORM_ID}/delivery_outcome/babies_delivered_other"]')
            )
        )
        field.clear()
        field.send_keys(str(value))
        field.find_element(By.XPATH, "..").click()

    def populate_dead_baby_information(
        self, index: int, place: str = 'health_facility', stillbirth: bool = True, date: Optional[Date] = None
    ):
        repeat_path = DEAD_BABY_REPEAT
        section = self._repeat_section(DEAD_BABY_SECTION, repeat_path, index)

        date_picker = section.find_element(By.CSS_SELECTOR, f'[name="{repeat_path}/baby_death_date"]')
        self.reports_page.set_date_input(date_picker, (date or Date.today()).isoformat())
        self._click_option(section, f"{repeat_path}/baby_death_place", place)
        self._click_option(section, f"{repeat_path}/stillbirth", get_yn_value(stillbirth))
        notes = section.find_element(By.CSS_SELECTOR, f'[name="{repeat_path}/baby_death_add_notes"]')
        notes.send_keys(f"Baby {index} death")
        logger.debug(f"Dead baby {index} populated")

    def populate_alive_baby_information(self, index: int, sex: str = 'male', danger: bool = False):
        repeat_path = ALIVE_BABY_REPEAT
        section = self._repeat_section(ALIVE_BABY_SECTION, repeat_path, index)

        self._click_option(section, f"{repeat_path}/baby_condition", "alive_well")
        section.find_element(By.CSS_SELECTOR, f'[name="{repeat_path}/baby_name"]').send_keys(f"AliveBaby-{index}")
        self._click_option(section, f"{repeat_path}/baby_sex", sex)
        self._click_option(section, f"{repeat_path}/birth_weight_know", "no")
        self._click_option(section, f"{repeat_path}/birth_length_know", "no")
        self._click_option(section, f"{repeat_path}/vaccines_received", "bcg_only")
        self._click_option(section, f"{repeat_path}/breastfeeding", "no")
        self._click_option(section, f"{repeat_path}/breastfed_within_1_hour", "no")

        for danger_sign in DANGER_SIGNS:
            self._click_option(section, f"{repeat_path}/{danger_sign}", get_yn_value(danger))
        logger.debug(f"Alive baby {index} populated")

    def get_dead_baby_uuid(self, index: int) -> str:
        return self.reports_page.get_report_field_value(
            f"report.{FORM_INTERNAL_ID}.baby_death.baby_death_repeat.{index}.baby_death_profile_doc"
        )

    def get_alive_baby_uuid(self, index: int) -> str:
        return self.reports_page.get_report_field_value(
            f"report.{FORM_INTERNAL_ID}.babys_condition.baby_repeat.{index}.baby_details.child_doc"
        )
