from fastapi import Depends, HTTPException, Query, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from database import get_async_db
from repositories import TourPackageRepository, TourRatingRepository, TourRepository
from schemas.rating import RatingSortField
from schemas.shared import PageRequest, SortControl, SortDirection
from services.tour import TourService
from services.tour_rating import TourRatingService


def parse_rating_sort(
    sort: List[str] = Query(
        default=[], description="Sort spec like 'score:desc', 'customerId:asc'"
    )
) -> List[SortControl]:
    result: List[SortControl] = []

    for item in sort:
        try:
            field_str, dir_str = item.split(":", 1)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid sort item '{item}', expected 'field:direction'",
            )

        try:
            field = RatingSortField(field_str)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid sort field '{field_str}'",
            )

        try:
            direction = SortDirection(dir_str.lower())
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid sort direction '{dir_str}'",
            )

        result.append(SortControl(sort_field=field.value, sort_direction=direction))

    return result


def page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(20, ge=1, le=100, description="Page size"),
) -> PageRequest:
    return PageRequest(page=page, size=size)


def rating_page_request(
    pageable: PageRequest = Depends(page_request),
    sort: List[SortControl] = Depends(parse_rating_sort),
) -> PageRequest:
    return pageable.model_copy(update={"sort": sort})


def get_tour_rating_service(
    db: AsyncSession = Depends(get_async_db),
) -> TourRatingService:
    return TourRatingService(TourRepository(db), TourRatingRepository(db))


def get_tour_service(db: AsyncSession = Depends(get_async_db)) -> TourService:
    return TourService(TourPackageRepository(db), TourRepository(db))
