from playwright.sync_api import Error as PlaywrightError
from .config import ScraperSettings


def accept_cookie_consent(session, settings: ScraperSettings | None = None) -> bool:
    """Click the consent dialog's accept button if it shows up in time."""
    settings = settings or ScraperSettings()
    try:
        button = session.wait_for_element(
            settings.selectors.consent_accept, settings.consent_timeout
        )
        button.click(timeout=settings.consent_timeout * 1000)
    except PlaywrightError:
        print("No cookie modal found or already accepted")
        return False
    print("  → Accepted cookie consent")
    return True
