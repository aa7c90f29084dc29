"""
Import tours from an Explore California style JSON file straight into the database.

Usage:
    python -m scripts.import_tours --data-file data/explore_california.json

Tours are read-only over HTTP, so this talks to the database rather than the API.
Run `python -m scripts.init_db` first.
"""

import argparse
import asyncio
import json
import os

from dotenv import load_dotenv

from database import AsyncSessionLocal
from logging_config import setup_logging
from repositories import TourPackageRepository, TourRepository
from services.tour import TourService

load_dotenv()

DEFAULT_DATA_FILE = os.getenv("IMPORT_DATA_FILE", "data/explore_california.json")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import tours from a JSON file")
    parser.add_argument(
        "--data-file",
        default=DEFAULT_DATA_FILE,
        help="Path to tour JSON file (default: %(default)s or IMPORT_DATA_FILE)",
    )
    parser.add_argument(
        "--skip-packages",
        action="store_true",
        help="Do not create the standard tour packages before importing",
    )
    return parser.parse_args()


async def import_file(data_file: str, ensure_packages: bool = True) -> int:
    with open(data_file, "r") as f:
        records = json.load(f)

    async with AsyncSessionLocal() as db:
        service = TourService(TourPackageRepository(db), TourRepository(db))
        if ensure_packages:
            await service.ensure_packages()
        tours = await service.import_tours(records)

    print(f"Imported {len(tours)} tours from {data_file}")
    return len(tours)


def main() -> None:
    setup_logging()
    args = parse_args()
    asyncio.run(import_file(args.data_file, ensure_packages=not args.skip_packages))


if __name__ == "__main__":
    main()
