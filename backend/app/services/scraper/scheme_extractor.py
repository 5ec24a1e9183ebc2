"""
Scheme Search Agent — MyScheme.gov.in Search Extractor
=======================================================
Drives one headless Chrome session through the MyScheme search page:
  1. Navigate to the search page
  2. Wait for the search box and type the query keystroke by keystroke
  3. Fire the input events the page's framework listens to, wait for the
     search button to enable and click it (Enter key as fallback)
  4. Wait for result cards and parse them with BeautifulSoup

Usage:
  python -m app.services.scraper.scheme_extractor --category Education --state Bihar
  python -m app.services.scraper.scheme_extractor --profession Farmer --income 50000 --visible
"""

import re
import json
import time
import argparse
import functools
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from app.config import Settings, SiteSelectors, get_settings
from app.models.scheme import SchemeRecord, SchemeSearchRequest, UserCriteria, utc_today
from app.services.query_builder import build_search_query
from app.services.scraper.browser import DriverFactory, browser_session, create_chrome_driver
from app.services.scraper.errors import (
    AutomationError,
    ElementNotFound,
    NavigationTimeout,
    ScraperError,
)
from app.utils.logger import logger

CLEAR_INPUT_SCRIPT = "arguments[0].value = '';"

# Typing through WebDriver does not always reach a framework-controlled input's
# state, so the events it listens to are fired explicitly.
DISPATCH_INPUT_EVENTS_SCRIPT = """
const input = arguments[0];
const key = arguments[1];
input.dispatchEvent(new Event('input', { bubbles: true }));
input.dispatchEvent(new Event('change', { bubbles: true }));
input.dispatchEvent(new KeyboardEvent('keydown', { key: key, bubbles: true }));
input.dispatchEvent(new KeyboardEvent('keyup', { key: key, bubbles: true }));
"""

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"


# ═══════════════════════════════════════════════════
# DOM Parsing
# ═══════════════════════════════════════════════════

def _text(element) -> str:
    if element is None:
        return ""
    return re.sub(r"\s+", " ", element.get_text(" ", strip=True)).strip()


def _is_hidden(element) -> bool:
    if element.has_attr("hidden") or element.get("aria-hidden") == "true":
        return True
    return bool(re.search(r"display\s*:\s*none|visibility\s*:\s*hidden", element.get("style", "")))


def parse_result_cards(
    html: str,
    selectors: SiteSelectors,
    base_url: str = "",
    today: Optional[date] = None,
) -> list[SchemeRecord]:
    """
    Map rendered result cards to SchemeRecords, in page order.
    Missing titles and descriptions fall back to placeholders; links are
    resolved against the page URL.
    """
    stamp = today or utc_today()
    soup = BeautifulSoup(html, "html.parser")
    records = []

    for card in soup.select(selectors.result_card):
        if _is_hidden(card):
            continue

        link = card.select_one(selectors.card_link)
        url = urljoin(base_url, link["href"].strip()) if link and link.get("href") else ""

        records.append(SchemeRecord(
            name=_text(card.select_one(selectors.card_title)) or NO_TITLE,
            benefit=_text(card.select_one(selectors.card_description)) or NO_DESCRIPTION,
            url=url,
            last_updated=stamp,
        ))

    return records


def snapshot_filename(now: Optional[datetime] = None) -> str:
    """error-<UTC timestamp>.png with ':' and '.' replaced so it is a safe file name."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    iso = moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    stamp = re.sub(r"[:.]", "-", iso)
    return f"error-{stamp}.png"


# ═══════════════════════════════════════════════════
# Extractor
# ═══════════════════════════════════════════════════

class SchemeExtractor:
    """
    Runs one search against MyScheme per call.
    Every call opens its own browser; nothing is shared between calls.
    """

    def __init__(self, settings: Optional[Settings] = None, driver_factory: Optional[DriverFactory] = None):
        self._settings = settings or get_settings()
        self._selectors = self._settings.selectors
        self._driver_factory = driver_factory or functools.partial(create_chrome_driver, self._settings)

    def search(self, query: str) -> list[SchemeRecord]:
        """
        Search MyScheme for `query` and return the scraped records.
        An empty list means the page showed no result cards.
        Raises a ScraperError subtype on any pipeline failure, after saving
        a screenshot of the page.
        """
        logger.info(f"🔍 Searching MyScheme for: '{query}'")

        with browser_session(self._driver_factory) as driver:
            try:
                return self._run(driver, query)
            except ScraperError as e:
                logger.error(f"❌ Scheme search failed: {e}")
                self.capture_snapshot(driver)
                raise
            except Exception as e:
                logger.error(f"❌ Scheme search failed: {e}")
                self.capture_snapshot(driver)
                message = e.msg if isinstance(e, WebDriverException) and e.msg else str(e)
                raise AutomationError(message or type(e).__name__) from e

    def _run(self, driver: WebDriver, query: str) -> list[SchemeRecord]:
        self._open_search_page(driver)
        search_input = self._wait_for_search_input(driver)
        self._type_query(driver, search_input, query)
        self._submit_search(driver, search_input, query)

        if not self._wait_for_results(driver):
            return []
        return self._extract(driver)

    # --- Steps ---

    def _wait(self, driver: WebDriver, timeout: float):
        return WebDriverWait(driver, timeout, poll_frequency=self._settings.poll_interval_seconds)

    def _open_search_page(self, driver: WebDriver):
        url = self._settings.myscheme_search_url
        timeout = self._settings.navigation_timeout_seconds
        driver.set_page_load_timeout(timeout)
        try:
            driver.get(url)
        except TimeoutException as e:
            raise NavigationTimeout(f"Timed out after {timeout:g}s loading {url}") from e
        logger.info(f"📄 Loaded {url}")

    def _wait_for_search_input(self, driver: WebDriver) -> WebElement:
        selector = self._selectors.search_input
        timeout = self._settings.input_timeout_seconds
        try:
            return self._wait(driver, timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, selector))
            )
        except TimeoutException as e:
            raise ElementNotFound(f"Search input '{selector}' not found within {timeout:g}s") from e

    def _type_query(self, driver: WebDriver, search_input: WebElement, query: str):
        search_input.clear()
        driver.execute_script(CLEAR_INPUT_SCRIPT, search_input)

        for char in query:
            search_input.send_keys(char)
            time.sleep(self._settings.typing_delay_seconds)

        time.sleep(self._settings.post_typing_pause_seconds)
        logger.info(f"⌨️ Typed query ({len(query)} chars)")

    def _submit_search(self, driver: WebDriver, search_input: WebElement, query: str):
        driver.execute_script(DISPATCH_INPUT_EVENTS_SCRIPT, search_input, query[-1:])

        selector = self._selectors.search_button
        try:
            button = self._wait(driver, self._settings.button_timeout_seconds).until(
                EC.element_to_be_clickable((By.CSS_SELECTOR, selector))
            )
        except TimeoutException:
            logger.warning(f"⚠️ Search button '{selector}' never enabled, submitting with Enter")
            search_input.send_keys(Keys.ENTER)
            return

        button.click()
        logger.info("✅ Triggered search with button click")

    def _wait_for_results(self, driver: WebDriver) -> bool:
        timeout = self._settings.results_timeout_seconds
        try:
            self._wait(driver, timeout).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, self._selectors.result_card))
            )
        except TimeoutException:
            logger.warning(f"⚠️ No results found within {timeout:g}s")
            return False
        return True

    def _extract(self, driver: WebDriver) -> list[SchemeRecord]:
        records = parse_result_cards(
            driver.page_source,
            self._selectors,
            base_url=driver.current_url,
        )
        logger.info(f"📦 Extracted {len(records)} scheme card(s)")
        return records

    # --- Diagnostics ---

    def capture_snapshot(self, driver: WebDriver) -> Optional[Path]:
        """Save a screenshot of the current page. Never raises."""
        path = Path(self._settings.screenshot_dir) / snapshot_filename()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if not driver.save_screenshot(str(path)):
                logger.warning(f"⚠️ Browser refused to write screenshot {path}")
                return None
        except (WebDriverException, OSError) as e:
            logger.warning(f"⚠️ Could not save error screenshot: {e}")
            return None

        logger.info(f"📸 Saved error screenshot to {path}")
        return path


# --- Singleton ---
_scheme_extractor: SchemeExtractor | None = None


def get_scheme_extractor() -> SchemeExtractor:
    global _scheme_extractor
    if _scheme_extractor is None:
        _scheme_extractor = SchemeExtractor()
    return _scheme_extractor


# ═══════════════════════════════════════════════════
# CLI
# ═══════════════════════════════════════════════════

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run one MyScheme search and print the scraped schemes")
    parser.add_argument("--category", help="Scheme category, e.g. Education")
    parser.add_argument("--profession", help="Profession, e.g. Farmer")
    parser.add_argument("--state", help="State, e.g. Bihar")
    parser.add_argument("--income", type=float, help="Annual income ceiling")
    parser.add_argument("--visible", action="store_true", help="Show the browser window")
    return parser.parse_args(argv)


def criteria_from_args(args: argparse.Namespace) -> SchemeSearchRequest:
    user = None
    if args.profession or args.state or args.income is not None:
        user = UserCriteria(profession=args.profession, state=args.state, income=args.income)
    return SchemeSearchRequest(category=args.category, user=user)


def main(argv=None) -> int:
    args = parse_args(argv)
    query = build_search_query(criteria_from_args(args))
    if query is None:
        logger.error("At least one of --category, --profession, --state or --income is required")
        return 2

    settings = get_settings()
    if args.visible:
        settings = settings.model_copy(update={"browser_headless": False})

    try:
        records = SchemeExtractor(settings).search(query)
    except ScraperError as e:
        logger.error(f"❌ Search failed: {e}")
        return 1

    print(json.dumps(
        [r.model_dump(mode="json", by_alias=True) for r in records],
        indent=2,
        ensure_ascii=False,
    ))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
