"""
Output strategies for the final list of scraped products.
"""

import json
from abc import ABC, abstractmethod
from typing import Sequence
import typer
from .db import SessionLocal
from .models import Product
from .records import ProductRecord


class Sink(ABC):
    @abstractmethod
    def emit(self, records: Sequence[ProductRecord]) -> None: ...


class JsonSink(Sink):
    """Print the records as a pretty-printed JSON array."""

    def __init__(self, stream=None):
        self.stream = stream

    def render(self, records: Sequence[ProductRecord]) -> str:
        return json.dumps(
            [r.model_dump(mode="json") for r in records], indent=4, ensure_ascii=False
        )

    def emit(self, records: Sequence[ProductRecord]) -> None:
        typer.echo(self.render(records), file=self.stream)


class StorageSink(Sink):
    """
    Insert one Product row per record, in order.

    Every insert is committed on its own, so a failure part-way through
    leaves the earlier rows stored.
    """

    def __init__(self, session_factory=None, source_url: str | None = None):
        self.session_factory = session_factory or SessionLocal
        self.source_url = source_url
        self.stored = 0

    def emit(self, records: Sequence[ProductRecord]) -> None:
        s = self.session_factory()
        try:
            for record in records:
                s.add(Product(source_url=self.source_url, **record.model_dump()))
                s.commit()
                self.stored += 1
        finally:
            s.close()
        print(f"Successfully stored {self.stored} products")


def make_sink(json_output: bool, source_url: str | None = None) -> Sink:
    return JsonSink() if json_output else StorageSink(source_url=source_url)
