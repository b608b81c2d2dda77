import os
from pathlib import Path
from pydantic import BaseModel, Field
from ruamel.yaml import YAML
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = "config/scraper.yml"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Chromium switches for the fixed browser profile
CHROMIUM_ARGS = [
    "--disable-gpu",
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-web-security",
    "--allow-running-insecure-content",
    "--disable-blink-features=AutomationControlled",
]

ENV_OVERRIDES = {
    "SCRAPER_BROWSER_ENDPOINT": "browser_endpoint",
    "SCRAPER_HEADLESS": "headless",
    "SCRAPER_TARGET_COUNT": "target_count",
    "SCRAPER_MAX_SCROLL_ATTEMPTS": "max_scroll_attempts",
    "SCRAPER_SCROLL_DISTANCE": "scroll_distance",
    "SCRAPER_SCROLL_DELAY": "scroll_delay",
    "SCRAPER_CONSENT_TIMEOUT": "consent_timeout",
    "SCRAPER_USER_AGENT": "user_agent",
}


class Selectors(BaseModel):
    product_card: str = ".product-card"
    title: str = ".product-card__title-link"
    price: str = ".product-card__price"
    image: str = ".product-card__image"
    product_link: str = ".product-card__media-link"
    consent_accept: str = "#onetrust-accept-btn-handler"


class ScraperSettings(BaseModel):
    target_count: int = Field(5, ge=1)
    max_scroll_attempts: int = Field(10, ge=1)
    scroll_distance: int = Field(800, ge=1)
    scroll_delay: float = Field(2.0, ge=0)
    consent_timeout: float = Field(5.0, ge=0)
    navigation_timeout: float = Field(30.0, gt=0)
    selectors: Selectors = Field(default_factory=Selectors)
    browser_endpoint: str | None = None
    headless: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    window_width: int = 1920
    window_height: int = 1080


def load_settings(config_path: str | None = None, **overrides) -> ScraperSettings:
    """
    Resolve settings from defaults, environment (.env) and an optional YAML file.

    The YAML file is expected to hold a top-level ``scraper:`` mapping. A
    missing file at the default location is ignored; an explicitly requested
    path that does not exist raises FileNotFoundError.
    """
    values: dict = {}
    for env_name, field in ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw not in (None, ""):
            values[field] = raw

    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if path.exists():
        yaml = YAML(typ="safe")
        with open(path) as f:
            cfg = yaml.load(f) or {}
        values.update(cfg.get("scraper", {}) or {})
    elif config_path:
        raise FileNotFoundError(f"Config file not found: {config_path}")

    values.update({k: v for k, v in overrides.items() if v is not None})
    return ScraperSettings(**values)
