#!/usr/bin/env python
# scripts/manage_db.py

"""
Database management CLI for the Toolkit Service.
"""
import argparse
import asyncio
import logging
import subprocess
import sys
from pathlib import Path

# --- Path Setup ---
project_root = Path(__file__).parent.parent.absolute()
sys.path.insert(0, str(project_root / "src"))

from toolkit_service.config import settings

# --- Logging and Helpers ---
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("manage_db")


def colored(text: str, color: str) -> str:
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "reset": "\033[0m",
    }
    return f"{colors.get(color, '')}{text}{colors['reset']}"


def run_command(command: str):
    logger.info(colored(f"--- Running: {command} ---", "yellow"))
    try:
        result = subprocess.run(
            command,
            shell=True,
            check=True,
            text=True,
            capture_output=True,
            cwd=project_root,
        )
    except subprocess.CalledProcessError as e:
        logger.error(colored(f"Command failed with exit code {e.returncode}", "red"))
        if e.stdout:
            print(e.stdout)
        if e.stderr:
            print(colored(e.stderr, "red"), file=sys.stderr)
        raise

    if result.stdout:
        print(result.stdout)
    if result.stderr:
        print(colored(result.stderr, "yellow"), file=sys.stderr)


async def create_tables():
    """Create tables straight from the models, bypassing migrations."""
    from toolkit_service.db import close_engine
    from toolkit_service.db import create_tables as create_all

    await create_all()
    await close_engine()
    logger.info(colored("Tables created.", "green"))


async def drop_tables():
    from toolkit_service.db import close_engine
    from toolkit_service.db import drop_tables as drop_all

    await drop_all()
    await close_engine()
    logger.info(colored("Tables dropped.", "green"))


SAMPLE_TOOLS = [
    {
        "title": "Visual Studio Code",
        "description": "Code editor with debugging, Git integration and extensions.",
        "url": "https://code.visualstudio.com",
        "category": "developer-tools",
        "featured": True,
    },
    {
        "title": "Figma",
        "description": "Collaborative interface design tool.",
        "url": "https://www.figma.com",
        "category": "design-tools",
        "featured": True,
    },
    {
        "title": "Squoosh",
        "description": "Compress and convert images in the browser.",
        "url": "https://squoosh.app",
        "category": "image-media-tools",
    },
    {
        "title": "PageSpeed Insights",
        "description": "Measure page performance and Core Web Vitals.",
        "url": "https://pagespeed.web.dev",
        "category": "seo-analytics-tools",
    },
    {
        "title": "MDN Web Docs",
        "description": "Reference documentation for web technologies.",
        "url": "https://developer.mozilla.org",
        "category": "learning-reference",
    },
]


async def seed_tools():
    """Insert the sample tools, skipping any whose URL is already stored."""
    from toolkit_service.crud.tools import ToolMutations
    from toolkit_service.db import close_engine, get_session_factory
    from toolkit_service.errors import DuplicateKey

    mutations = ToolMutations(get_session_factory())
    created = 0
    try:
        for data in SAMPLE_TOOLS:
            try:
                await mutations.create_tool(data)
                created += 1
            except DuplicateKey:
                logger.info(f"Skipping existing tool: {data['url']}")
    finally:
        await close_engine()
    logger.info(colored(f"Seeded {created} tools.", "green"))


async def show_stats():
    """Print the tool counts the admin dashboard shows."""
    from toolkit_service.crud.tools import ToolQueries
    from toolkit_service.db import close_engine, get_session_factory

    try:
        stats = await ToolQueries(get_session_factory()).get_stats()
    finally:
        await close_engine()

    for name, value in stats.model_dump().items():
        print(f"{name:>10}: {value}")


# --- Main Command Orchestrator ---
async def main():
    parser = argparse.ArgumentParser(
        description=f"{settings.PROJECT_NAME} Database Management Tool"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_mig_parser = subparsers.add_parser(
        "create-migration", help="Create a new Alembic migration file."
    )
    create_mig_parser.add_argument(
        "-m", "--message", required=True, help="Migration description."
    )
    subparsers.add_parser(
        "upgrade", help="Apply all pending migrations to the database."
    )
    downgrade_parser = subparsers.add_parser(
        "downgrade", help="Downgrade migrations by a number of steps."
    )
    downgrade_parser.add_argument(
        "-s",
        "--step",
        type=int,
        default=1,
        help="Number of steps to downgrade (default: 1).",
    )
    subparsers.add_parser(
        "verify", help="Verify that the DB schema matches the SQLAlchemy models."
    )
    subparsers.add_parser(
        "create-tables", help="Create tables from the models without migrations."
    )
    subparsers.add_parser("drop-tables", help="Drop every table of the service.")
    subparsers.add_parser("seed", help="Insert a handful of sample tools.")
    subparsers.add_parser("stats", help="Print tool counts by status and category.")

    args = parser.parse_args()

    try:
        if args.command == "create-migration":
            run_command(f'alembic revision --autogenerate -m "{args.message}"')
        elif args.command == "upgrade":
            run_command("alembic upgrade head")
        elif args.command == "downgrade":
            run_command(f"alembic downgrade -{args.step}")
        elif args.command == "verify":
            run_command("alembic check")
        elif args.command == "create-tables":
            await create_tables()
        elif args.command == "drop-tables":
            await drop_tables()
        elif args.command == "seed":
            await seed_tools()
        elif args.command == "stats":
            await show_stats()

        print(colored("\nOperation completed successfully.", "green"))

    except Exception as e:
        logger.error(colored(f"\nOperation failed: {e}", "red"), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
