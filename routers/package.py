from typing import List
from fastapi import APIRouter, Depends
from dependencies import get_tour_service
from schemas.tour import TourPackageRead
from services.tour import TourService

router = APIRouter(prefix="/packages", tags=["packages"])


@router.get("", response_model=List[TourPackageRead])
async def get_packages(service: TourService = Depends(get_tour_service)):
    return await service.list_packages()


@router.get("/{code}", response_model=TourPackageRead)
async def get_package(code: str, service: TourService = Depends(get_tour_service)):
    return await service.get_package(code)
