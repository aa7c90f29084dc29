"""
Read-only tour catalogue plus the bulk import used to load it.
"""
import logging
from typing import Iterable

from exceptions import NotFoundError
from models import Difficulty, Region, Tour, TourPackage
from repositories import TourPackageRepository, TourRepository
from schemas.shared import Page, PageRequest
from schemas.tour import TourImportRecord, TourPackageRead, TourRead

logger = logging.getLogger(__name__)

STANDARD_PACKAGES: dict[str, str] = {
    "BC": "Backpack Cal",
    "CC": "California Calm",
    "CH": "California Hot springs",
    "CY": "Cycle California",
    "DS": "From Desert to Sea",
    "KC": "Kids California",
    "NW": "Nature Watch",
    "SC": "Snowboard Cali",
    "TC": "Taste of California",
}


class TourService:
    def __init__(self, packages: TourPackageRepository, tours: TourRepository):
        self.packages = packages
        self.tours = tours

    async def list_packages(self) -> list[TourPackageRead]:
        return [
            TourPackageRead.model_validate(p, from_attributes=True)
            for p in await self.packages.find_all()
        ]

    async def get_package(self, code: str) -> TourPackageRead:
        package = await self.packages.find_by_code(code)
        if package is None:
            raise NotFoundError(f"Tour package does not exist {code}")
        return TourPackageRead.model_validate(package, from_attributes=True)

    async def list_tours(self, request: PageRequest) -> Page[TourRead]:
        tours, total = await self.tours.find_all(request)
        return self._page(tours, request, total)

    async def get_tour(self, tour_id: int) -> TourRead:
        tour = await self.tours.find_by_id(tour_id)
        if tour is None:
            raise NotFoundError(f"Tour does not exist {tour_id}")
        return TourRead.model_validate(tour, from_attributes=True)

    async def find_by_package_code(self, code: str, request: PageRequest) -> Page[TourRead]:
        tours, total = await self.tours.find_by_tour_package_code(code, request)
        return self._page(tours, request, total)

    async def ensure_packages(self) -> int:
        """Create any of the standard packages that are missing; returns how many were added."""
        created = 0
        for code, name in STANDARD_PACKAGES.items():
            if await self.packages.find_by_code(code) is None:
                await self.packages.save(TourPackage(code=code, name=name))
                created += 1
        if created:
            logger.info(f"Created {created} tour packages")
        return created

    async def import_tours(self, records: Iterable[dict]) -> list[TourRead]:
        """
        Load tours from Explore California style records.

        `packageType` names an existing package; `difficulty` and `region`
        are matched against their labels. Any bad record aborts the import
        before anything is written.
        """
        tours: list[Tour] = []
        for idx, raw in enumerate(records):
            record = TourImportRecord.model_validate(raw)
            package = await self.packages.find_by_name(record.packageType)
            if package is None:
                raise ValueError(
                    f"Record {idx} ({record.title}): unknown tour package '{record.packageType}'"
                )
            try:
                difficulty = Difficulty.find_by_label(record.difficulty) if record.difficulty else None
                region = Region.find_by_label(record.region) if record.region else None
            except ValueError as exc:
                raise ValueError(f"Record {idx} ({record.title}): {exc}") from exc
            tours.append(
                Tour(
                    title=record.title,
                    description=record.description,
                    blurb=record.blurb,
                    price=record.price,
                    duration=record.length,
                    bullets=record.bullets,
                    keywords=record.keywords,
                    tour_package_code=package.code,
                    difficulty=difficulty,
                    region=region,
                )
            )
        await self.tours.save_all(tours)
        logger.info(f"Imported {len(tours)} tours")
        return [TourRead.model_validate(t, from_attributes=True) for t in tours]

    @staticmethod
    def _page(tours: list[Tour], request: PageRequest, total: int) -> Page[TourRead]:
        items = [TourRead.model_validate(t, from_attributes=True) for t in tours]
        return Page[TourRead].build(items, request, total)
