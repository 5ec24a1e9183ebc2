"""
Scheme Search Agent — Application Configuration
Browser, timing and selector settings. All config from .env file.
The MyScheme DOM selectors live here so a markup change is a one-place edit.
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class SiteSelectors:
    """CSS selectors the extractor relies on for the MyScheme search page."""
    search_input: str
    search_button: str
    result_card: str
    card_title: str
    card_description: str
    card_link: str


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- App ---
    app_env: str = "development"
    app_debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    log_level: str = "INFO"
    cors_origins_csv: str = "*"

    # --- Browser ---
    browser_headless: bool = True
    browser_window_width: int = 1280
    browser_window_height: int = 800
    browser_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    chromedriver_path: str = ""      # Empty = let Selenium Manager resolve it

    # --- Target Site ---
    myscheme_search_url: str = "https://www.myscheme.gov.in/search"

    # --- Selectors (external DOM contract) ---
    selector_search_input: str = 'input[placeholder="Search"]'
    selector_search_button: str = 'button[aria-label="Search"]'
    selector_result_card: str = "div.rounded-xl.shadow-md.bg-white"
    selector_card_title: str = "h5, h4, h3"
    selector_card_description: str = "p"
    selector_card_link: str = "a[href]"

    # --- Timing (seconds) ---
    navigation_timeout_seconds: float = 60.0
    input_timeout_seconds: float = 20.0
    button_timeout_seconds: float = 5.0
    results_timeout_seconds: float = 30.0
    poll_interval_seconds: float = 0.25
    typing_delay_seconds: float = 0.1
    post_typing_pause_seconds: float = 0.5

    # --- Diagnostics ---
    screenshot_dir: str = "screenshots"

    # --- Derived ---
    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_csv.split(",") if o.strip()]

    @property
    def selectors(self) -> SiteSelectors:
        """Selector set bundled for the extractor."""
        return SiteSelectors(
            search_input=self.selector_search_input,
            search_button=self.selector_search_button,
            result_card=self.selector_result_card,
            card_title=self.selector_card_title,
            card_description=self.selector_card_description,
            card_link=self.selector_card_link,
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached singleton for application settings."""
    return Settings()
