"""
Async stores for tours, tour packages and tour ratings.
Each repository wraps one AsyncSession; save/delete commit immediately.
"""
from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import Tour, TourPackage, TourRating, TourRatingPk
from schemas.rating import RatingSortField
from schemas.shared import PageRequest, SortDirection


async def _fetch_page(db: AsyncSession, stmt, request: PageRequest, order_exprs: list):
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    stmt = stmt.order_by(*order_exprs).offset(request.offset).limit(request.size)
    rows = (await db.execute(stmt)).scalars().all()
    return list(rows), total


class TourPackageRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[TourPackage]:
        stmt = select(TourPackage).order_by(TourPackage.code.asc())
        return list((await self.db.execute(stmt)).scalars().all())

    async def find_by_code(self, code: str) -> TourPackage | None:
        return await self.db.get(TourPackage, code)

    async def find_by_name(self, name: str) -> TourPackage | None:
        stmt = select(TourPackage).where(TourPackage.name == name)
        return (await self.db.execute(stmt)).scalar_one_or_none()

    async def save(self, package: TourPackage) -> TourPackage:
        self.db.add(package)
        await self.db.commit()
        return package


class TourRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, tour_id: int) -> Tour | None:
        return await self.db.get(Tour, tour_id)

    async def find_all(self, request: PageRequest) -> tuple[list[Tour], int]:
        return await _fetch_page(self.db, select(Tour), request, [Tour.id.asc()])

    async def find_by_tour_package_code(
        self, code: str, request: PageRequest
    ) -> tuple[list[Tour], int]:
        stmt = select(Tour).where(Tour.tour_package_code == code)
        return await _fetch_page(self.db, stmt, request, [Tour.id.asc()])

    async def save_all(self, tours: list[Tour]) -> list[Tour]:
        self.db.add_all(tours)
        await self.db.commit()
        return tours


class TourRatingRepository:
    SORT_COLUMNS = {
        RatingSortField.score: TourRating.score,
        RatingSortField.customer_id: TourRating.customer_id,
    }

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_tour_id(self, tour_id: int) -> list[TourRating]:
        stmt = select(TourRating).where(TourRating.tour_id == tour_id)
        return list((await self.db.execute(stmt)).scalars().all())

    async def find_by_tour_id_paged(
        self, tour_id: int, request: PageRequest
    ) -> tuple[list[TourRating], int]:
        order_exprs = []
        for s in request.sort:
            col = self.SORT_COLUMNS[RatingSortField(s.sort_field)]
            order_exprs.append(
                asc(col) if s.sort_direction is SortDirection.asc else desc(col)
            )
        order_exprs.append(TourRating.customer_id.asc())
        stmt = select(TourRating).where(TourRating.tour_id == tour_id)
        return await _fetch_page(self.db, stmt, request, order_exprs)

    async def find_by_pk(self, pk: TourRatingPk) -> TourRating | None:
        return await self.db.get(TourRating, (pk.tour_id, pk.customer_id))

    async def save(self, rating: TourRating) -> TourRating:
        self.db.add(rating)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        return rating

    async def delete(self, rating: TourRating) -> None:
        await self.db.delete(rating)
        await self.db.commit()
