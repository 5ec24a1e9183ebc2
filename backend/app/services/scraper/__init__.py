"""
Scheme Search Agent — Scraper Package
Exports the MyScheme extractor, its browser session helpers and errors.
"""

from app.services.scraper.errors import ScraperError, NavigationTimeout, ElementNotFound, AutomationError
from app.services.scraper.browser import browser_session, create_chrome_driver
from app.services.scraper.scheme_extractor import (
    SchemeExtractor,
    get_scheme_extractor,
    parse_result_cards,
)
