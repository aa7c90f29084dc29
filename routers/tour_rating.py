from fastapi import APIRouter, Depends, Response, status
from dependencies import get_tour_rating_service, rating_page_request
from schemas.rating import AverageRead, RatingDto, RatingPatch
from schemas.shared import Page, PageRequest
from services.tour_rating import TourRatingService

router = APIRouter(prefix="/tours/{tour_id}/ratings", tags=["ratings"])


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_tour_rating(
    tour_id: int,
    rating: RatingDto,
    service: TourRatingService = Depends(get_tour_rating_service),
):
    await service.create_rating(tour_id, rating)
    return Response(status_code=status.HTTP_201_CREATED)


@router.get("", response_model=Page[RatingDto])
async def get_all_ratings_for_tour(
    tour_id: int,
    pageable: PageRequest = Depends(rating_page_request),
    service: TourRatingService = Depends(get_tour_rating_service),
):
    return await service.list_ratings(tour_id, pageable)


@router.get("/average", response_model=AverageRead)
async def get_average(
    tour_id: int,
    service: TourRatingService = Depends(get_tour_rating_service),
):
    return await service.get_average(tour_id)


@router.put("", response_model=RatingDto)
async def update_with_put(
    tour_id: int,
    rating: RatingDto,
    service: TourRatingService = Depends(get_tour_rating_service),
):
    return await service.update_rating_full(tour_id, rating)


@router.patch("", response_model=RatingDto)
async def update_with_patch(
    tour_id: int,
    rating: RatingPatch,
    service: TourRatingService = Depends(get_tour_rating_service),
):
    return await service.update_rating_partial(tour_id, rating)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tour_rating(
    tour_id: int,
    customer_id: int,
    service: TourRatingService = Depends(get_tour_rating_service),
):
    await service.delete_rating(tour_id, customer_id)
