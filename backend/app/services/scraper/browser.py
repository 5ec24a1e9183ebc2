"""
Scheme Search Agent — Browser Session
One headless Chrome per search, always quit on the way out.
"""

from contextlib import contextmanager
from typing import Callable, Iterator

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.remote.webdriver import WebDriver

from app.config import Settings
from app.services.scraper.errors import AutomationError
from app.utils.logger import logger

DriverFactory = Callable[[], WebDriver]


def build_chrome_options(settings: Settings) -> Options:
    """Chrome flags for a sandbox-less container run."""
    options = Options()
    if settings.browser_headless:
        options.add_argument("--headless=new")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-setuid-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.add_argument("--disable-gpu")
    options.add_argument(
        f"--window-size={settings.browser_window_width},{settings.browser_window_height}"
    )
    options.add_argument(f"--user-agent={settings.browser_user_agent}")
    return options


def create_chrome_driver(settings: Settings) -> WebDriver:
    """Launch a fresh Chrome instance configured from settings."""
    options = build_chrome_options(settings)
    if settings.chromedriver_path:
        service = Service(executable_path=settings.chromedriver_path)
        driver = webdriver.Chrome(service=service, options=options)
    else:
        driver = webdriver.Chrome(options=options)
    return driver


@contextmanager
def browser_session(factory: DriverFactory) -> Iterator[WebDriver]:
    """
    Scoped browser acquisition.
    The driver is quit exactly once, whether the body returns or raises.
    """
    try:
        driver = factory()
    except WebDriverException as e:
        raise AutomationError(f"Failed to launch browser: {e.msg or e}") from e

    logger.info("🌐 Browser session opened")
    try:
        yield driver
    finally:
        try:
            driver.quit()
            logger.info("🧹 Browser session closed")
        except WebDriverException as e:
            logger.warning(f"⚠️ Browser quit reported an error: {e}")
