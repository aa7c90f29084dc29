from fastapi import APIRouter, Depends, Query
from dependencies import get_tour_service, page_request
from schemas.shared import Page, PageRequest
from schemas.tour import TourRead
from services.tour import TourService

router = APIRouter(prefix="/tours", tags=["tours"])


@router.get("", response_model=Page[TourRead])
async def get_tours(
    pageable: PageRequest = Depends(page_request),
    service: TourService = Depends(get_tour_service),
):
    return await service.list_tours(pageable)


@router.get("/search/by-package", response_model=Page[TourRead])
async def find_by_tour_package_code(
    code: str = Query(..., min_length=1, max_length=2, description="Tour package code"),
    pageable: PageRequest = Depends(page_request),
    service: TourService = Depends(get_tour_service),
):
    return await service.find_by_package_code(code, pageable)


@router.get("/{tour_id}", response_model=TourRead)
async def get_tour(
    tour_id: int,
    service: TourService = Depends(get_tour_service),
):
    return await service.get_tour(tour_id)
