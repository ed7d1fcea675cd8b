#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the notes API. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action config
    python run.py --action seed --database data/test.db
"""

import asyncio
import subprocess
import sys
from datetime import datetime
from pathlib import Path

import click

from notekeeper.core.logging import get_logger, setup_logging

PROJECT_ROOT = Path(__file__).parent

DEMO_NOTES = [
    {
        "title": "Welcome Note",
        "content": "This is a welcome note for testing purposes.",
        "created_at": "2025-08-01 10:00:00",
        "updated_at": "2025-08-01 10:00:00",
        "pinned": 1,
        "hidden": 0,
    },
    {
        "title": "Hidden Note",
        "content": "This note is hidden and should only appear in hidden notes API.",
        "created_at": "2025-08-02 12:30:00",
        "updated_at": "2025-08-02 12:30:00",
        "pinned": 0,
        "hidden": 1,
    },
    {
        "title": "Project Ideas",
        "content": (
            "List of project ideas:\n1. Build a task manager\n"
            "2. Create a blog platform\n3. Develop a chatbot"
        ),
        "created_at": "2025-08-03 09:15:00",
        "updated_at": "2025-08-03 09:15:00",
        "pinned": 0,
        "hidden": 0,
    },
    {
        "title": "Meeting Notes",
        "content": (
            "Meeting with team on 2025-08-04. "
            "Discussed project timelines and resource allocation."
        ),
        "created_at": "2025-08-04 14:20:00",
        "updated_at": "2025-08-05 16:45:00",
        "pinned": 1,
        "hidden": 0,
    },
    {
        "title": "Clipboard",
        "content": "Temporary content copied to clipboard.",
        "created_at": "2025-08-05 08:00:00",
        "updated_at": "2025-08-05 08:00:00",
        "pinned": 1,
        "hidden": 0,
    },
]


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "config", "seed", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--database",
    default="data/test.db",
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="SQLite file to fill with demo notes (for seed action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    database: Path,
) -> None:
    """
    Notes API Entry Point.

    Run the application server, view configuration, or create a demo
    database.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # View loaded configuration
        python run.py --action config

        # Write demo notes to data/test.db
        python run.py --action seed
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "config":
        show_config(logger)
    elif action == "seed":
        seed_database(logger, database)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server with uvicorn."""
    from notekeeper.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "notekeeper.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def show_config(logger) -> None:
    """Display loaded configuration."""
    from notekeeper.core.config import get_app_config

    click.echo("Application Configuration:\n")

    try:
        app_config = get_app_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    sections = {
        "Application": app_config.application,
        "Database": app_config.database,
        "Logging": app_config.logging,
        "Feature Flags": app_config.features,
        "Security": app_config.security,
    }
    for title, section in sections.items():
        click.echo(f"{title} Settings (from YAML):")
        click.echo("-" * 40)
        _echo_mapping(section.model_dump(), indent=2)
        click.echo()

    logger.info("Configuration displayed successfully")


def _echo_mapping(values: dict, indent: int) -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{' ' * indent}{key}:")
            _echo_mapping(value, indent + 2)
        else:
            click.echo(f"{' ' * indent}{key}: {value}")


def seed_database(logger, database: Path) -> None:
    """Create a SQLite file holding the demo notes."""
    path = database if database.is_absolute() else PROJECT_ROOT / database
    path.parent.mkdir(parents=True, exist_ok=True)

    count = asyncio.run(_write_demo_notes(path))

    logger.info("Demo database written", extra={"path": str(path), "notes": count})
    click.echo(click.style(f"Wrote {count} demo notes to {path}", fg="green"))


async def _write_demo_notes(path: Path) -> int:
    from sqlalchemy import delete
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    from notekeeper.models.base import Base
    from notekeeper.models.note import Note

    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        async with session_factory() as session:
            await session.execute(delete(Note))
            for row in DEMO_NOTES:
                session.add(
                    Note(
                        **{
                            **row,
                            "created_at": datetime.fromisoformat(row["created_at"]),
                            "updated_at": datetime.fromisoformat(row["updated_at"]),
                        }
                    )
                )
            await session.commit()
    finally:
        await engine.dispose()

    return len(DEMO_NOTES)


def show_info(logger) -> None:
    """Display application information."""
    from notekeeper.core.config import get_app_config

    app = get_app_config().application
    click.echo(app.name)
    click.echo("=" * 40)
    click.echo(f"Version: {app.version}")
    click.echo(f"Description: {app.description}")
    click.echo(f"Environment: {app.environment}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action config   Display configuration")
    click.echo("  --action seed     Write demo notes to a SQLite file")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
