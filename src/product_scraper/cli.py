from typing import Optional
import typer
from tabulate import tabulate
from apscheduler.schedulers.blocking import BlockingScheduler
from dotenv import load_dotenv
from .config import DEFAULT_CONFIG_PATH, load_settings
from .db import SessionLocal, bootstrap_db
from .models import Product
from .scraper import scrape_products
from .sinks import make_sink

load_dotenv()

app = typer.Typer(help="Category page product scraper (Playwright + SQLAlchemy)")


def run_once(url: str, json_output: bool, config_path: str | None = None, headless: bool | None = None) -> int:
    try:
        settings = load_settings(config_path, headless=headless)
        products = scrape_products(url, settings)
        if not json_output:
            bootstrap_db()
        make_sink(json_output, source_url=url).emit(products)
    except Exception as e:
        typer.echo(f"Error scraping products: {e}", err=True)
        return 1
    return 0


@app.command()
def scrape(
    url: str = typer.Argument(..., help="Category page URL"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON instead of storing"),
    config_path: Optional[str] = typer.Option(None, "--config", help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"),
    headless: Optional[bool] = typer.Option(None, "--headless/--no-headless", help="Run the browser headless"),
):
    """Scrape the first products of a category page and store them or print JSON."""
    code = run_once(url, json_output, config_path, headless)
    if code:
        raise typer.Exit(code=code)


@app.command()
def schedule(
    url: str = typer.Argument(..., help="Category page URL"),
    cron: str = typer.Option("0 6 * * *", help="Cron expression"),
    config_path: Optional[str] = typer.Option(None, "--config", help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"),
):
    """
    Scrape and store on a schedule (default: daily at 06:00).
    Cron format: 'M H DOM MON DOW'
    """
    M, H, DOM, MON, DOW = cron.split()

    def job():
        if run_once(url, False, config_path):
            typer.echo("Scheduled run failed; waiting for the next one", err=True)

    sched = BlockingScheduler()
    sched.add_job(
        job,
        "cron",
        minute=M,
        hour=H,
        day=DOM,
        month=MON,
        day_of_week=DOW,
    )
    typer.echo(f"Scheduled job with cron '{cron}'")
    sched.start()


@app.command("list-products")
def list_products(
    limit: int = typer.Option(20, help="Number of most recent products to show"),
):
    """List stored products, most recent first."""
    bootstrap_db()
    session = SessionLocal()
    try:
        products = (
            session.query(Product)
            .order_by(Product.created_at.desc(), Product.id.desc())
            .limit(limit)
            .all()
        )
        if not products:
            typer.echo("No products found in database")
            return

        data = [
            {
                "ID": p.id,
                "Title": p.title,
                "Price": p.price,
                "Product URL": p.product_url,
                "Scraped": f"{p.created_at:%Y-%m-%d %H:%M}",
            }
            for p in products
        ]
        typer.echo(tabulate(data, headers="keys", tablefmt="grid"))
    finally:
        session.close()


@app.command()
def clean(
    dry_run: bool = typer.Option(False, help="Show what would be deleted without actually deleting"),
):
    """Delete all stored products."""
    bootstrap_db()
    session = SessionLocal()
    try:
        count = session.query(Product).count()
        if dry_run:
            typer.echo(f"[DRY RUN] Would delete {count} products")
            return
        session.query(Product).delete()
        session.commit()
        typer.echo(f"Deleted {count} products")
    except Exception as e:
        session.rollback()
        typer.echo(f"Database error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        session.close()


if __name__ == "__main__":
    app()
