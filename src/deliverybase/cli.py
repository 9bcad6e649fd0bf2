"""Command-line interface for DeliveryBase.

This module provides the CLI commands for running and managing
the DeliveryBase application.
"""

from typing import NoReturn

import click

from deliverybase.core.config import get_settings
from deliverybase.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="DeliveryBase")
def cli() -> None:
    """DeliveryBase - Order delivery back-end.

    Settings are read from DELIVERYBASE_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool) -> None:
    """Start the DeliveryBase server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting DeliveryBase server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "deliverybase.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all tables and seeds the action catalogue and the default roles.
    Existing grants are left untouched. In production, use migrations to
    create the schema.
    """
    import asyncio

    from deliverybase.infrastructure.persistence.database import (
        get_db_manager,
        seed_catalogue,
    )
    from deliverybase.infrastructure.persistence import models  # noqa: F401

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = get_db_manager()
        try:
            await db.create_tables()
            async with db.session() as session:
                await seed_catalogue(session)
                await session.commit()
            click.echo("Database initialized successfully.")
        finally:
            await db.disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--email", type=str, default=None, help="Admin email (prompts if not provided)")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Admin password (prompts if not provided)",
)
@click.option("--name", type=str, default="Admin", show_default=True, help="First name")
@click.option("--lastname", type=str, default="DeliveryBase", show_default=True, help="Last name")
def create_admin(email: str | None, password: str | None, name: str, lastname: str) -> None:
    """Create a confirmed ROLE_ADMIN user."""
    import asyncio

    from deliverybase.core.errors import DeliveryBaseError
    from deliverybase.domain.services import AccountService
    from deliverybase.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)

    if email is None:
        email = click.prompt("Admin email", type=str)
    if password is None:
        password = click.prompt("Admin password", hide_input=True, confirmation_prompt=True)

    async def create() -> None:
        db = get_db_manager()
        try:
            async with db.session() as session:
                user = await AccountService(session).create_admin(
                    email=email,
                    password=password,
                    name=name,
                    lastname=lastname,
                )
                await session.commit()
        except DeliveryBaseError as e:
            click.echo(f"Error: {e.message}", err=True)
            logger.error("Admin creation failed", error=e.message, email=email)
            raise SystemExit(1)
        finally:
            await db.disconnect()

        click.echo(f"\nAdmin created successfully!\n  User ID: {user.id}\n  Email:   {email}\n")
        logger.info("Admin created via CLI", user_id=user.id, email=email)

    asyncio.run(create())


@cli.command()
def info() -> None:
    """Display DeliveryBase configuration."""
    settings = get_settings()

    click.echo(f"""
DeliveryBase v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Email Tokens: {settings.verification_token_expire_minutes} minutes

Services:
  Email:        {settings.email_provider}
  Geocoding:    {"enabled" if settings.geocoding_enabled else "disabled"}
  Routing:      {settings.ors_base_url} ({settings.ors_routing_profile})

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `deliverybase` command and by `python -m deliverybase`.
    """
    cli()


if __name__ == "__main__":
    main()
