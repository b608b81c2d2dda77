import os
from dotenv import load_dotenv
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

load_dotenv()

DEFAULT_DB_PATH = os.getenv("SCRAPER_DB_PATH", "data/products.sqlite")


def get_engine(path: str = DEFAULT_DB_PATH):
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{path}", future=True, echo=False)


engine = get_engine()
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, future=True
)


def bootstrap_db(bind=None):
    from .models import Base
    Base.metadata.create_all(bind or engine)
