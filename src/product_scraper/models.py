from datetime import datetime
from decimal import Decimal
from sqlalchemy import Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Product(Base):
    __tablename__ = "products"
    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(500), index=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    image_url: Mapped[str] = mapped_column(String(1000))
    product_url: Mapped[str] = mapped_column(String(1000))
    source_url: Mapped[str | None] = mapped_column(String(1000))  # category page
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
