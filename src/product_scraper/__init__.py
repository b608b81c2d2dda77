"""
Product Scraper - category page extraction for JavaScript storefronts
Scroll-driven Playwright collection with JSON export or SQLAlchemy storage
"""

__version__ = "0.1.0"

from .config import ScraperSettings, load_settings
from .records import ProductRecord, extract_product, parse_price
from .collector import ScrollCollector
from .scraper import scrape_products
from .sinks import Sink, JsonSink, StorageSink, make_sink

__all__ = [
    "ScraperSettings",
    "load_settings",
    "ProductRecord",
    "extract_product",
    "parse_price",
    "ScrollCollector",
    "scrape_products",
    "Sink",
    "JsonSink",
    "StorageSink",
    "make_sink",
]
