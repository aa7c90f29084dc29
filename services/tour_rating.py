"""
Rating aggregation and lookup for the ratings of a single tour.
Sits between the HTTP routers and the tour / tour-rating stores.
"""
import logging

from sqlalchemy.exc import IntegrityError

from exceptions import NotFoundError, RatingConflictError
from models import Tour, TourRating, TourRatingPk
from repositories import TourRatingRepository, TourRepository
from schemas.rating import AverageRead, RatingDto, RatingPatch
from schemas.shared import Page, PageRequest

logger = logging.getLogger(__name__)


def to_dto(rating: TourRating) -> RatingDto:
    return RatingDto(
        score=rating.score, comment=rating.comment, customer_id=rating.pk.customer_id
    )


class TourRatingService:
    def __init__(self, tours: TourRepository, ratings: TourRatingRepository):
        self.tours = tours
        self.ratings = ratings

    async def create_rating(self, tour_id: int, dto: RatingDto) -> RatingDto:
        tour = await self.verify_tour(tour_id)
        pk = TourRatingPk(tour.id, dto.customer_id)
        if await self.ratings.find_by_pk(pk) is not None:
            logger.warning(
                f"Duplicate rating rejected for tour_id={tour_id}, customer_id={dto.customer_id}"
            )
            raise RatingConflictError(
                f"Customer {dto.customer_id} has already rated tour {tour_id}"
            )
        rating = TourRating(
            tour_id=pk.tour_id,
            customer_id=pk.customer_id,
            score=dto.score,
            comment=dto.comment,
        )
        try:
            await self.ratings.save(rating)
        except IntegrityError:
            # the tour may have been removed underneath us; otherwise a concurrent create won
            await self.verify_tour(tour_id)
            logger.warning(
                f"Rating insert conflicted for tour_id={tour_id}, customer_id={dto.customer_id}"
            )
            raise RatingConflictError(
                f"Customer {dto.customer_id} has already rated tour {tour_id}"
            )
        logger.info(
            f"Created rating for tour_id={tour_id}, customer_id={dto.customer_id}, score={dto.score}"
        )
        return to_dto(rating)

    async def list_ratings(self, tour_id: int, request: PageRequest) -> Page[RatingDto]:
        tour = await self.verify_tour(tour_id)
        ratings, total = await self.ratings.find_by_tour_id_paged(tour.id, request)
        return Page[RatingDto].build([to_dto(r) for r in ratings], request, total)

    async def get_average(self, tour_id: int) -> AverageRead:
        """
        Mean score of every rating of the tour.

        Ratings without a score are skipped; with nothing to average the
        result is None rather than 0.
        """
        tour = await self.verify_tour(tour_id)
        scores = [
            r.score for r in await self.ratings.find_by_tour_id(tour.id)
            if r.score is not None
        ]
        if not scores:
            return AverageRead(average=None)
        return AverageRead(average=sum(scores) / len(scores))

    async def update_rating_full(self, tour_id: int, dto: RatingDto) -> RatingDto:
        rating = await self.verify_rating(tour_id, dto.customer_id)
        rating.score = dto.score
        rating.comment = dto.comment
        await self.ratings.save(rating)
        logger.info(f"Replaced rating for tour_id={tour_id}, customer_id={dto.customer_id}")
        return to_dto(rating)

    async def update_rating_partial(self, tour_id: int, patch: RatingPatch) -> RatingDto:
        rating = await self.verify_rating(tour_id, patch.customer_id)
        for key, val in patch.present_fields().items():
            setattr(rating, key, val)
        await self.ratings.save(rating)
        logger.info(f"Patched rating for tour_id={tour_id}, customer_id={patch.customer_id}")
        return to_dto(rating)

    async def delete_rating(self, tour_id: int, customer_id: int) -> None:
        rating = await self.verify_rating(tour_id, customer_id)
        await self.ratings.delete(rating)
        logger.info(f"Deleted rating for tour_id={tour_id}, customer_id={customer_id}")

    async def verify_tour(self, tour_id: int) -> Tour:
        tour = await self.tours.find_by_id(tour_id)
        if tour is None:
            logger.info(f"Tour lookup failed for tour_id={tour_id}")
            raise NotFoundError(f"Tour does not exist {tour_id}")
        return tour

    async def verify_rating(self, tour_id: int, customer_id: int) -> TourRating:
        await self.verify_tour(tour_id)
        rating = await self.ratings.find_by_pk(TourRatingPk(tour_id, customer_id))
        if rating is None:
            logger.info(f"Rating lookup failed for tour_id={tour_id}, customer_id={customer_id}")
            raise NotFoundError(
                f"Tour-Rating pair for request({tour_id} for customer{customer_id})"
            )
        return rating
