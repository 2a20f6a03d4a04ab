"""
SurfSpots Backend — Command Line Interface
============================================

What:  Operator commands that run outside the HTTP server.
How:   argparse sub-commands, each running one coroutine with asyncio.run()
       against a fresh session from async_session_factory.
Who:   Installed as the `surfspots-cli` console script.

Commands:
    surfspots-cli import --file spots.csv [--batch-size 100]
    surfspots-cli user create [--email admin@example.com] [--role admin]
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, Optional

from surfspots.config import settings
from surfspots.database import async_session_factory, dispose_engine
from surfspots.exceptions import SurfSpotsError, ValidationError
from surfspots.log import setup_logging
from surfspots.security import Role
from surfspots.services.auth_service import UserService
from surfspots.services.importing_service import (
    CsvSpotEntrySource,
    ImportingService,
    ImportSourceError,
)
from surfspots.stores.spot_store import SqlSpotStore
from surfspots.stores.user_store import SqlUserStore

logger = logging.getLogger(__name__)


def describe_error(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        fields = ", ".join(f"{v.field}: {v.description}" for v in exc.errors)
        entry = exc.context.get("entry")
        prefix = f"entry {entry}: " if entry else ""
        return f"{prefix}{exc.message} ({fields})"
    if isinstance(exc, SurfSpotsError):
        return exc.message
    return str(exc)


async def run_import(path: str, batch_size: int) -> int:
    try:
        async with async_session_factory() as session:
            store = SqlSpotStore(session, batch_size=batch_size)
            service = ImportingService(store)
            return await service.import_spots(CsvSpotEntrySource(path))
    finally:
        await dispose_engine()


async def run_create_user(email: str, password: str, role: str) -> str:
    try:
        async with async_session_factory() as session:
            service = UserService(SqlUserStore(session))
            user = await service.create_user(email, password, role)
            await session.commit()
            return user.id
    finally:
        await dispose_engine()


def import_command(args: argparse.Namespace) -> int:
    try:
        count = asyncio.run(run_import(args.file, args.batch_size))
    except (ImportSourceError, SurfSpotsError, ValueError) as e:
        logger.error("Import failed: %s", describe_error(e))
        print(0)
        return 1

    print(count)
    return 0


def user_create_command(args: argparse.Namespace) -> int:
    email = args.email or input("E-mail: ")
    password = getpass.getpass("Password: ")
    role = args.role or input(f"Role [{Role.ADMIN.value}]: ") or Role.ADMIN.value

    try:
        user_id = asyncio.run(run_create_user(email, password, role))
    except SurfSpotsError as e:
        logger.error("User creation failed: %s", describe_error(e))
        return 1

    print(f"Created user {user_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="surfspots-cli", description="SurfSpots operator tools")
    commands = parser.add_subparsers(dest="command", required=True)

    importer = commands.add_parser("import", help="import spots from a CSV file")
    importer.add_argument("--file", required=True, help="CSV file: name,latitude,longitude,locality,country_code")
    importer.add_argument(
        "--batch-size",
        type=int,
        default=settings.spot_batch_size,
        help="rows per INSERT statement (default: %(default)s)",
    )
    importer.set_defaults(handler=import_command)

    user = commands.add_parser("user", help="manage operators")
    user_commands = user.add_subparsers(dest="user_command", required=True)
    create = user_commands.add_parser("create", help="create an operator")
    create.add_argument("--email")
    create.add_argument("--role", choices=[role.value for role in Role])
    create.set_defaults(handler=user_create_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging()
    args = build_parser().parse_args(argv)
    if getattr(args, "batch_size", 1) < 1:
        logger.error("--batch-size must be at least 1")
        return 2
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
