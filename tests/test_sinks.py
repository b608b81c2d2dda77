import json
from decimal import Decimal
from io import StringIO

import pytest
from sqlalchemy.exc import SQLAlchemyError

from product_scraper.models import Product
from product_scraper.records import ProductRecord
from product_scraper.sinks import JsonSink, StorageSink, make_sink


def record(title, price="9.99"):
    return ProductRecord(
        title=title,
        price=Decimal(price),
        image_url=f"https://cdn.example.com/{title}.jpg",
        product_url=f"/p/{title}",
    )


def test_json_sink_prints_pretty_array():
    stream = StringIO()
    JsonSink(stream).emit([record("Café", "12.50"), record("Té")])

    text = stream.getvalue()
    data = json.loads(text)
    assert data == [
        {
            "title": "Café",
            "price": 12.5,
            "image_url": "https://cdn.example.com/Café.jpg",
            "product_url": "/p/Café",
        },
        {
            "title": "Té",
            "price": 9.99,
            "image_url": "https://cdn.example.com/Té.jpg",
            "product_url": "/p/Té",
        },
    ]
    assert '\n    {\n        "title": "Café"' in text


def test_storage_sink_inserts_in_order(session_factory, capsys):
    sink = StorageSink(session_factory, source_url="https://shop.example.com/c/1")
    sink.emit([record("A"), record("B", "1.50"), record("A")])

    s = session_factory()
    try:
        rows = s.query(Product).order_by(Product.id).all()
        assert [r.title for r in rows] == ["A", "B", "A"]
        assert rows[1].price == Decimal("1.50")
        assert rows[0].source_url == "https://shop.example.com/c/1"
    finally:
        s.close()
    assert "Successfully stored 3 products" in capsys.readouterr().out


def test_storage_sink_keeps_rows_written_before_a_failure(session_factory, monkeypatch):
    sink = StorageSink(session_factory)
    original = sink.session_factory

    calls = {"n": 0}

    def flaky_factory():
        s = original()
        real_commit = s.commit

        def commit():
            calls["n"] += 1
            if calls["n"] == 2:
                raise SQLAlchemyError("disk I/O error")
            real_commit()

        s.commit = commit
        return s

    sink.session_factory = flaky_factory
    with pytest.raises(SQLAlchemyError):
        sink.emit([record("A"), record("B"), record("C")])

    s = session_factory()
    try:
        assert [r.title for r in s.query(Product).all()] == ["A"]
    finally:
        s.close()


def test_make_sink_selects_strategy():
    assert isinstance(make_sink(True), JsonSink)
    assert isinstance(make_sink(False), StorageSink)
