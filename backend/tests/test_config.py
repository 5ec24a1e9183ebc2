from app.config import get_settings
from app.services.scraper.browser import build_chrome_options
from app.services.scraper.scheme_extractor import criteria_from_args, parse_args
from app.services.query_builder import build_search_query


def test_selectors_can_be_overridden_from_env(monkeypatch):
    monkeypatch.setenv("SELECTOR_RESULT_CARD", "article.scheme-card")
    monkeypatch.setenv("SELECTOR_CARD_TITLE", "h2")

    get_settings.cache_clear()
    selectors = get_settings().selectors

    assert selectors.result_card == "article.scheme-card"
    assert selectors.card_title == "h2"
    assert selectors.search_input == 'input[placeholder="Search"]'


def test_defaults_match_service_contract():
    settings = get_settings()
    assert settings.app_port == 3000
    assert settings.myscheme_search_url == "https://www.myscheme.gov.in/search"
    assert settings.cors_origins == ["*"]


def test_chrome_options(monkeypatch):
    monkeypatch.setenv("BROWSER_WINDOW_WIDTH", "1024")

    get_settings.cache_clear()
    args = build_chrome_options(get_settings()).arguments

    assert "--headless=new" in args
    assert "--no-sandbox" in args
    assert "--disable-setuid-sandbox" in args
    assert "--window-size=1024,800" in args


def test_headless_can_be_disabled(monkeypatch):
    monkeypatch.setenv("BROWSER_HEADLESS", "false")

    get_settings.cache_clear()
    assert "--headless=new" not in build_chrome_options(get_settings()).arguments


def test_cli_arguments_build_query():
    args = parse_args(["--profession", "Farmer", "--income", "50000"])
    assert build_search_query(criteria_from_args(args)) == "For farmer professionals with income under 50000"


def test_cli_without_criteria_builds_nothing():
    assert build_search_query(criteria_from_args(parse_args([]))) is None
