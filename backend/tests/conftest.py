import pytest
from selenium.common.exceptions import NoSuchElementException, TimeoutException, WebDriverException

from app.config import Settings, get_settings

INPUT = 'input[placeholder="Search"]'
BUTTON = 'button[aria-label="Search"]'
CARD = "div.rounded-xl.shadow-md.bg-white"

RESULTS_HTML = """
<html><body>
  <div class="rounded-xl shadow-md bg-white">
    <h3>PM Kisan Samman Nidhi</h3>
    <p>Income support of  6000 per year
       to farmer families.</p>
    <a href="/schemes/pm-kisan">Details</a>
  </div>
  <div class="rounded-xl shadow-md bg-white">
    <span>No heading here</span>
  </div>
</body></html>
"""


class FakeElement:
    def __init__(self, driver, name, enabled=True):
        self._driver = driver
        self.name = name
        self.enabled = enabled
        self.typed = []

    def clear(self):
        self._driver.maybe_fail("type")
        self.typed.clear()

    def send_keys(self, *keys):
        self._driver.maybe_fail("type")
        self.typed.extend(keys)

    def click(self):
        self._driver.maybe_fail("click")
        self._driver.clicked.append(self.name)

    def is_displayed(self):
        return True

    def is_enabled(self):
        return self.enabled


class FakeDriver:
    """
    Minimal WebDriver stand-in.
    `fail_at` names the step that raises: navigate, type, click, results, extract.
    `missing` holds selectors that never appear.
    """

    def __init__(self, html=RESULTS_HTML, fail_at=None, missing=(), button_enabled=True,
                 current_url="https://www.myscheme.gov.in/search"):
        self.html = html
        self.fail_at = fail_at
        self.missing = set(missing)
        self.current_url = current_url
        self.visited = []
        self.scripts = []
        self.clicked = []
        self.screenshots = []
        self.quit_calls = 0
        self.page_load_timeout = None
        self.elements = {
            INPUT: FakeElement(self, "input"),
            BUTTON: FakeElement(self, "button", enabled=button_enabled),
            CARD: FakeElement(self, "card"),
        }

    def maybe_fail(self, step):
        if self.fail_at == step:
            raise WebDriverException(f"injected failure at {step}")

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def get(self, url):
        if self.fail_at == "navigate":
            raise TimeoutException("page load timed out")
        self.visited.append(url)

    def find_element(self, by, value):
        if value == CARD:
            self.maybe_fail("results")
        if value in self.missing or value not in self.elements:
            raise NoSuchElementException(f"no element {value}")
        return self.elements[value]

    def execute_script(self, script, *args):
        self.scripts.append(script)

    @property
    def page_source(self):
        self.maybe_fail("extract")
        return self.html

    def save_screenshot(self, filename):
        self.screenshots.append(filename)
        return True

    def quit(self):
        self.quit_calls += 1


@pytest.fixture
def fast_settings(tmp_path):
    """Settings with near-zero waits and screenshots under tmp_path."""
    return Settings(
        _env_file=None,
        navigation_timeout_seconds=1,
        input_timeout_seconds=0.05,
        button_timeout_seconds=0.05,
        results_timeout_seconds=0.05,
        poll_interval_seconds=0.01,
        typing_delay_seconds=0,
        post_typing_pause_seconds=0,
        screenshot_dir=str(tmp_path / "screenshots"),
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
