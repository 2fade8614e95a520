"""Management commands for the booking service."""

from __future__ import annotations

import logging
import os
from typing import Optional

import click

from mentorbook.core.config import load_settings
from mentorbook.core.exceptions import MentorBookError
from mentorbook.db.session import create_tables, get_engine
from mentorbook.schemas.dtos import RegisterRequest

logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@click.group()
def cli() -> None:
    """Entry point for management commands."""


@cli.command("init-db")
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy URL to initialize. Overrides DATABASE_URL.",
)
def init_db(database_url: Optional[str]) -> None:
    """Create the users, login_sessions and bookings tables."""
    url = database_url or load_settings().database_url
    engine = get_engine(url)
    create_tables(engine)
    logging.info("Tables created for %s", engine.url.render_as_string(hide_password=True))


@cli.command("seed-demo")
def seed_demo() -> None:
    """Register a demo mentor (John, ICP) and mentee (Jane)."""
    from mentorbook.main import create_app

    app = create_app()
    services = app.extensions["mentorbook"]
    with app.app_context():
        try:
            john = services.user_service.register(
                RegisterRequest(
                    username="John", password="john-pass", role="mentor", expertise="ICP"
                )
            )
            jane = services.user_service.register(
                RegisterRequest(username="Jane", password="jane-pass", role="mentee")
            )
        except MentorBookError as e:
            raise click.ClickException(e.message)

    click.echo(f"mentor John: {john.id}")
    click.echo(f"mentee Jane: {jane.id}")


@cli.command("run")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=None, type=int, help="Defaults to PORT or 5000.")
def run(host: str, port: Optional[int]) -> None:
    """Serve the API with the Flask development server."""
    from mentorbook.main import create_app

    app = create_app()
    app.run(host=host, port=port or int(os.getenv("PORT", 5000)))


if __name__ == "__main__":
    cli()
