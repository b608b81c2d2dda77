"""
Product records and extraction from product-card DOM elements.
"""

import re
from decimal import Decimal, InvalidOperation
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from .config import Selectors
from .errors import ExtractionError


class ProductRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    price: Decimal
    image_url: str
    product_url: str

    @field_validator("title", "image_url", "product_url", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)

    def is_valid(self) -> bool:
        return bool(self.title) and self.price > 0

    def rejection_reason(self) -> str | None:
        if not self.title:
            return "empty title"
        if self.price <= 0:
            return f"non-positive price for '{self.title}'"
        return None


def parse_price(text: str | None) -> Decimal:
    """
    Normalize a displayed price into a Decimal.

    Only digits, ',' and '.' are kept. When both separators appear the
    rightmost one is the decimal separator and the other is dropped as a
    thousands separator; a separator repeated on its own is also treated as
    grouping. Anything unparseable yields Decimal("0").

    >>> parse_price("12,50 €")
    Decimal('12.50')
    >>> parse_price("1.234,56")
    Decimal('1234.56')
    """
    cleaned = re.sub(r"[^0-9,.]", "", text or "")
    if not cleaned:
        return Decimal("0")

    last_comma, last_dot = cleaned.rfind(","), cleaned.rfind(".")
    if last_comma >= 0 and last_dot >= 0:
        decimal_sep = "," if last_comma > last_dot else "."
        thousands_sep = "." if decimal_sep == "," else ","
        cleaned = cleaned.replace(thousands_sep, "")
    else:
        sep = "," if last_comma >= 0 else "."
        if cleaned.count(sep) > 1:
            cleaned = cleaned.replace(sep, "")
        decimal_sep = sep

    cleaned = cleaned.replace(decimal_sep, ".")
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")


def is_absolute_url(url: str | None) -> bool:
    if not url or any(ch.isspace() for ch in url):
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _child(element, selector: str):
    child = element.query_selector(selector)
    if child is None:
        raise ExtractionError(f"Missing element '{selector}'")
    return child


def extract_product(element, selectors: Selectors | None = None) -> ProductRecord:
    """Build a ProductRecord from one product-card element handle."""
    selectors = selectors or Selectors()

    title = _child(element, selectors.title).inner_text().strip()
    price = parse_price(_child(element, selectors.price).inner_text())

    image_url = (_child(element, selectors.image).get_attribute("src") or "").strip()
    if not is_absolute_url(image_url):
        raise ExtractionError("Invalid image URL")

    product_url = (_child(element, selectors.product_link).get_attribute("href") or "").strip()
    if not product_url:
        raise ExtractionError("Missing product URL")

    return ProductRecord(
        title=title,
        price=price,
        image_url=image_url,
        product_url=product_url,
    )
