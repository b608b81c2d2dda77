"""
Scoped Playwright browser session for JavaScript-rendered category pages.

The session either launches a local Chromium with the fixed scraping profile
or, when ``browser_endpoint`` is configured, attaches to an already running
Chrome over CDP (e.g. ``http://localhost:9222``).
"""

from playwright.sync_api import sync_playwright, Error as PlaywrightError
from .config import CHROMIUM_ARGS, ScraperSettings
from .errors import BrowserSessionError

HIDE_WEBDRIVER_JS = "Object.defineProperty(navigator, 'webdriver', {get: () => undefined})"


class BrowserSession:
    def __init__(self, settings: ScraperSettings | None = None):
        self.settings = settings or ScraperSettings()
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    def __enter__(self) -> "BrowserSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> None:
        s = self.settings
        try:
            self._playwright = sync_playwright().start()
            if s.browser_endpoint:
                print(f"  → Connecting to browser at {s.browser_endpoint}")
                self._browser = self._playwright.chromium.connect_over_cdp(s.browser_endpoint)
            else:
                self._browser = self._playwright.chromium.launch(
                    headless=s.headless,
                    args=CHROMIUM_ARGS + [f"--window-size={s.window_width},{s.window_height}"],
                    ignore_default_args=["--enable-automation"],
                )
            self._context = self._browser.new_context(
                user_agent=s.user_agent,
                viewport={"width": s.window_width, "height": s.window_height},
                ignore_https_errors=True,
            )
            self._context.add_init_script(HIDE_WEBDRIVER_JS)
            self.page = self._context.new_page()
        except PlaywrightError as e:
            self.close()
            raise BrowserSessionError(f"Could not start browser session: {e}") from e

    def open(self, url: str) -> None:
        print(f"  → Opening {url}")
        try:
            self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.settings.navigation_timeout * 1000,
            )
        except PlaywrightError as e:
            raise BrowserSessionError(f"Could not load {url}: {e}") from e

    def execute_script(self, js: str):
        return self.page.evaluate(js)

    def find_all(self, selector: str) -> list:
        return self.page.query_selector_all(selector)

    def wait_for_element(self, selector: str, timeout_seconds: float):
        """Wait until ``selector`` is attached; raises a Playwright TimeoutError."""
        return self.page.wait_for_selector(
            selector, timeout=timeout_seconds * 1000, state="attached"
        )

    def pause(self, seconds: float) -> None:
        if seconds > 0:
            self.page.wait_for_timeout(seconds * 1000)

    def close(self) -> None:
        try:
            if self._browser is not None:
                self._browser.close()
        except PlaywrightError as e:
            print(f"  → Browser did not close cleanly: {e}")
        finally:
            self._browser = self._context = self.page = None
            if self._playwright is not None:
                self._playwright.stop()
                self._playwright = None
