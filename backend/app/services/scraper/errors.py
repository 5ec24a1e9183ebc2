"""
Scheme Search Agent — Scraper Errors
Typed failures of the browser pipeline. The router maps all of them to a 500.
"""


class ScraperError(Exception):
    """Base class for a failed search run. str(exc) is surfaced as `details`."""


class NavigationTimeout(ScraperError):
    """The search page did not finish loading in time."""


class ElementNotFound(ScraperError):
    """A required element did not render within its wait bound."""


class AutomationError(ScraperError):
    """Any other browser automation failure (launch, typing, clicking, reading the DOM)."""
