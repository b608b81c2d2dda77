class ScraperError(Exception):
    """Base class for errors raised while scraping a category page."""


class BrowserSessionError(ScraperError):
    """The browser session could not be established or the page not loaded."""


class ExtractionError(ScraperError, ValueError):
    """A single product card could not be turned into a record."""


class NoProductsFoundError(ScraperError):
    def __init__(self, message: str = "No valid products found to save"):
        super().__init__(message)
