from typing import List
from .browser import BrowserSession
from .collector import ScrollCollector
from .config import ScraperSettings
from .consent import accept_cookie_consent
from .records import ProductRecord


def scrape_products(
    url: str,
    settings: ScraperSettings | None = None,
    session_factory=BrowserSession,
) -> List[ProductRecord]:
    """
    Open the category page, dismiss the cookie dialog and collect products.

    The browser session is released on every exit path.
    """
    settings = settings or ScraperSettings()
    with session_factory(settings) as session:
        session.open(url)
        accept_cookie_consent(session, settings)
        return ScrollCollector(session, settings).collect()
