"""
Flask CLI commands.

    flask --app backend.app init-db
    flask --app backend.app top-schools --limit 50 --urls
"""
import logging

import click
from flask import current_app

from backend.database.context import DatabaseContext
from backend.database.indexes import ensure_indexes
from backend.factories.service_factory import ServiceFactory
from backend.modules.catalog.models.school_model import SchoolModel

logger = logging.getLogger(__name__)


def init_database():
    """Create indexes and the bootstrap admin account. Needs an app context."""
    ensure_indexes(DatabaseContext.get_mongo_db())
    config = current_app.config
    ServiceFactory.create_auth_service().bootstrap_admin(
        config.get("ADMIN_EMAIL"),
        config.get("ADMIN_PASSWORD"),
        config.get("ADMIN_NAME") or "Administrator",
    )


def register_cli(app):

    @app.cli.command("init-db")
    def init_db_command():
        """Create indexes and the bootstrap admin account."""
        init_database()
        click.echo("Database initialised.")

    @app.cli.command("top-schools")
    @click.option("--limit", default=50, show_default=True, type=click.IntRange(min=1),
                  help="Number of school pages to pre-render.")
    @click.option("--urls/--slugs", default=False, help="Print API detail URLs instead of bare slugs.")
    def top_schools_command(limit, urls):
        """Print the best rated active schools, one per line, for static pre-rendering."""
        base_url = current_app.config["PUBLIC_API_BASE_URL"].rstrip("/")
        for slug in SchoolModel.top_slugs(limit):
            click.echo(f"{base_url}/api/schools/{slug}" if urls else slug)
