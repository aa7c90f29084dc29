"""
Create the schema and the standard tour packages.

Usage:
    python -m scripts.init_db
"""

import asyncio

from database import AsyncSessionLocal, init_models
from logging_config import setup_logging
from repositories import TourPackageRepository, TourRepository
from services.tour import TourService


async def init_db() -> None:
    await init_models()
    async with AsyncSessionLocal() as db:
        service = TourService(TourPackageRepository(db), TourRepository(db))
        created = await service.ensure_packages()
    print(f"Schema ready; {created} tour packages created")


def main() -> None:
    setup_logging()
    asyncio.run(init_db())


if __name__ == "__main__":
    main()
