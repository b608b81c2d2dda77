import os
import tempfile

os.environ.setdefault(
    "SCRAPER_DB_PATH", os.path.join(tempfile.mkdtemp(), "products.sqlite")
)

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from product_scraper.config import ScraperSettings, Selectors
from product_scraper.db import bootstrap_db

SEL = Selectors()


class FakeNode:
    def __init__(self, text="", attrs=None):
        self.text = text
        self.attrs = attrs or {}
        self.clicks = 0
        self.click_timeout = None

    def inner_text(self):
        return self.text

    def get_attribute(self, name):
        return self.attrs.get(name)

    def click(self, timeout=None):
        self.clicks += 1
        self.click_timeout = timeout


class FakeCard:
    """Stand-in for a Playwright ElementHandle of one product card."""

    def __init__(self, children):
        self.children = children

    def query_selector(self, selector):
        return self.children.get(selector)


def make_card(
    title="Widget",
    price="12,50 €",
    image="https://cdn.example.com/widget.jpg",
    href="/p/widget",
    missing=(),
):
    children = {
        SEL.title: FakeNode(text=title),
        SEL.price: FakeNode(text=price),
        SEL.image: FakeNode(attrs={"src": image}),
        SEL.product_link: FakeNode(attrs={"href": href}),
    }
    for selector in missing:
        children.pop(selector)
    return FakeCard(children)


def numbered_cards(n, start=1):
    return [
        make_card(title=f"Product {i}", href=f"/p/{i}", image=f"https://cdn.example.com/{i}.jpg")
        for i in range(start, start + n)
    ]


class FakeSession:
    """
    In-memory browser session.

    ``passes`` holds the cards visible on each successive find_all call; the
    last entry repeats once the list is exhausted.
    """

    def __init__(self, passes=None, consent=None, fail_on_scroll=()):
        self.passes = passes or [[]]
        self.consent = consent
        self.fail_on_scroll = set(fail_on_scroll)
        self.scripts = []
        self.pauses = []
        self.opened = []
        self.find_calls = 0
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self, url):
        self.opened.append(url)

    def execute_script(self, js):
        self.scripts.append(js)
        if len(self.scripts) in self.fail_on_scroll:
            from playwright.sync_api import Error

            raise Error("Execution context was destroyed")

    def find_all(self, selector):
        assert selector == SEL.product_card
        cards = self.passes[min(self.find_calls, len(self.passes) - 1)]
        self.find_calls += 1
        return cards

    def wait_for_element(self, selector, timeout_seconds):
        if self.consent is None:
            raise PlaywrightTimeoutError(f"Timeout {int(timeout_seconds * 1000)}ms exceeded.")
        return self.consent

    def pause(self, seconds):
        self.pauses.append(seconds)

    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    return ScraperSettings(scroll_delay=0, consent_timeout=0)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    bootstrap_db(engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
