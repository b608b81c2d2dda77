"""
Scroll-driven collection of product cards from an infinite-scroll listing.

Each attempt scrolls further down the page, waits a fixed delay for lazy
content to render and then re-reads every visible product card. Cards seen in
earlier attempts are dropped again by title, so re-scanning is harmless.
"""

from typing import List
from playwright.sync_api import Error as PlaywrightError
from .config import ScraperSettings
from .errors import ExtractionError, NoProductsFoundError
from .records import ProductRecord, extract_product

SCROLL_JS = 'window.scrollTo({{ top: {offset}, behavior: "smooth" }});'


class ScrollCollector:
    def __init__(self, session, settings: ScraperSettings | None = None):
        self.session = session
        self.settings = settings or ScraperSettings()
        self.attempts = 0

    def scroll(self, attempt: int) -> None:
        offset = (attempt + 1) * self.settings.scroll_distance
        self.session.execute_script(SCROLL_JS.format(offset=offset))

    def scrape_visible_products(self, existing: List[ProductRecord]) -> List[ProductRecord]:
        """Extract new, valid records from the cards currently in the DOM."""
        seen = {p.title for p in existing}
        products = []
        for element in self.session.find_all(self.settings.selectors.product_card):
            try:
                product = extract_product(element, self.settings.selectors)
            except (ExtractionError, PlaywrightError) as e:
                print(f"Failed to scrape product: {e}")
                continue

            reason = product.rejection_reason()
            if reason:
                print(f"Skipping product: {reason}")
                continue
            if product.title in seen:
                continue

            seen.add(product.title)
            products.append(product)
            print(f"Scraped product: {product.title}")
        return products

    def collect(self) -> List[ProductRecord]:
        s = self.settings
        products: List[ProductRecord] = []
        self.attempts = 0

        while len(products) < s.target_count and self.attempts < s.max_scroll_attempts:
            print(f"  → Scroll attempt {self.attempts + 1}/{s.max_scroll_attempts}")
            try:
                self.scroll(self.attempts)
                self.session.pause(s.scroll_delay)
                products.extend(self.scrape_visible_products(products))
            except PlaywrightError as e:
                print(f"Scroll attempt {self.attempts + 1} failed: {e}")
            self.attempts += 1

        if not products:
            raise NoProductsFoundError()

        return products[: s.target_count]
