"""
Unit tests for TourRatingService against in-memory stores.
Run with: pytest tests/test_tour_rating_service.py -v
"""
import pytest
from sqlalchemy.exc import IntegrityError

from exceptions import NotFoundError, RatingConflictError
from models import Tour, TourRating, TourRatingPk
from schemas.rating import RatingDto, RatingPatch
from schemas.shared import PageRequest
from services.tour_rating import TourRatingService


class FakeTourRepository:
    def __init__(self, *tour_ids: int):
        self.tours = {tid: Tour(id=tid, title=f"Tour {tid}", tour_package_code="BC") for tid in tour_ids}

    async def find_by_id(self, tour_id):
        return self.tours.get(tour_id)


class FakeTourRatingRepository:
    def __init__(self):
        self.rows: dict[TourRatingPk, TourRating] = {}
        self.calls: list[str] = []
        self.save_error: Exception | None = None
        self.before_save = None

    def add(self, tour_id, customer_id, score, comment=None):
        rating = TourRating(tour_id=tour_id, customer_id=customer_id, score=score, comment=comment)
        self.rows[rating.pk] = rating
        return rating

    async def find_by_tour_id(self, tour_id):
        self.calls.append("find_by_tour_id")
        return [r for pk, r in self.rows.items() if pk.tour_id == tour_id]

    async def find_by_tour_id_paged(self, tour_id, request):
        self.calls.append("find_by_tour_id_paged")
        matching = sorted(
            (r for pk, r in self.rows.items() if pk.tour_id == tour_id),
            key=lambda r: r.customer_id,
        )
        return matching[request.offset:request.offset + request.size], len(matching)

    async def find_by_pk(self, pk):
        self.calls.append("find_by_pk")
        return self.rows.get(pk)

    async def save(self, rating):
        self.calls.append("save")
        if self.before_save is not None:
            self.before_save()
        if self.save_error is not None:
            raise self.save_error
        self.rows[rating.pk] = rating
        return rating

    async def delete(self, rating):
        self.calls.append("delete")
        del self.rows[rating.pk]


@pytest.fixture
def ratings():
    return FakeTourRatingRepository()


@pytest.fixture
def tours():
    return FakeTourRepository(1, 2)


@pytest.fixture
def service(tours, ratings):
    return TourRatingService(tours, ratings)


def test_rating_pk_is_a_value():
    assert TourRatingPk(1, 7) == TourRatingPk(1, 7)
    assert TourRating(tour_id=1, customer_id=7, score=3).pk == TourRatingPk(1, 7)
    assert len({TourRatingPk(1, 7), TourRatingPk(1, 7), TourRatingPk(7, 1)}) == 2


@pytest.mark.asyncio
async def test_create_then_list_contains_rating(service):
    dto = RatingDto(score=4, comment="ok", customer_id=7)
    created = await service.create_rating(1, dto)
    assert created == dto

    page = await service.list_ratings(1, PageRequest())
    assert page.items == [dto]
    assert page.total_elements == 1
    assert page.total_pages == 1


@pytest.mark.asyncio
async def test_create_on_missing_tour_never_touches_rating_store(service, ratings):
    with pytest.raises(NotFoundError) as exc_info:
        await service.create_rating(99, RatingDto(score=4, customer_id=7))
    assert exc_info.value.message == "Tour does not exist 99"
    assert ratings.calls == []


@pytest.mark.asyncio
async def test_update_and_delete_on_missing_tour_never_touch_rating_store(service, ratings):
    ratings.add(1, 7, 3)
    with pytest.raises(NotFoundError):
        await service.update_rating_full(99, RatingDto(score=1, customer_id=7))
    with pytest.raises(NotFoundError):
        await service.delete_rating(99, 7)
    assert ratings.calls == []


@pytest.mark.asyncio
async def test_duplicate_create_is_a_conflict(service, ratings):
    ratings.add(1, 7, 3, "first")
    with pytest.raises(RatingConflictError):
        await service.create_rating(1, RatingDto(score=5, comment="second", customer_id=7))
    assert "save" not in ratings.calls
    assert ratings.rows[TourRatingPk(1, 7)].comment == "first"


@pytest.mark.asyncio
async def test_store_uniqueness_violation_is_a_conflict(service, ratings):
    ratings.save_error = IntegrityError(
        "INSERT INTO tour_ratings", {}, Exception("UNIQUE constraint failed")
    )
    with pytest.raises(RatingConflictError):
        await service.create_rating(1, RatingDto(score=5, customer_id=8))


@pytest.mark.asyncio
async def test_tour_removed_during_create_is_not_found(service, tours, ratings):
    ratings.before_save = lambda: tours.tours.pop(1)
    ratings.save_error = IntegrityError(
        "INSERT INTO tour_ratings", {}, Exception("FOREIGN KEY constraint failed")
    )
    with pytest.raises(NotFoundError) as exc_info:
        await service.create_rating(1, RatingDto(score=5, customer_id=8))
    assert exc_info.value.message == "Tour does not exist 1"


@pytest.mark.asyncio
async def test_average_without_ratings_is_none(service, ratings):
    ratings.add(2, 1, 5)
    result = await service.get_average(1)
    assert result.average is None


@pytest.mark.asyncio
async def test_average_is_arithmetic_mean(service, ratings):
    ratings.add(1, 1, 3)
    ratings.add(1, 2, 5)
    ratings.add(2, 3, 0)
    assert (await service.get_average(1)).average == 4.0


@pytest.mark.asyncio
async def test_average_skips_unscored_ratings(service, ratings):
    ratings.add(1, 1, 2)
    ratings.add(1, 2, None, "no score given")
    assert (await service.get_average(1)).average == 2.0


@pytest.mark.asyncio
async def test_average_on_missing_tour(service):
    with pytest.raises(NotFoundError):
        await service.get_average(42)


@pytest.mark.asyncio
async def test_full_update_overwrites_both_fields_with_none(service, ratings):
    ratings.add(1, 7, 4, "ok")
    result = await service.update_rating_full(1, RatingDto(customer_id=7))
    assert result == RatingDto(score=None, comment=None, customer_id=7)
    stored = ratings.rows[TourRatingPk(1, 7)]
    assert stored.score is None
    assert stored.comment is None


@pytest.mark.asyncio
async def test_partial_update_with_only_score_keeps_comment(service, ratings):
    ratings.add(1, 7, 4, "ok")
    result = await service.update_rating_partial(1, RatingPatch(customer_id=7, score=1))
    assert (result.score, result.comment) == (1, "ok")


@pytest.mark.asyncio
async def test_partial_update_with_only_comment_keeps_score(service, ratings):
    ratings.add(1, 7, 4, "ok")
    result = await service.update_rating_partial(1, RatingPatch(customer_id=7, comment="great"))
    assert (result.score, result.comment) == (4, "great")


@pytest.mark.asyncio
async def test_partial_update_ignores_explicit_nulls(service, ratings):
    ratings.add(1, 7, 4, "ok")
    patch = RatingPatch.model_validate({"customerId": 7, "score": None, "comment": "fine"})
    result = await service.update_rating_partial(1, patch)
    assert (result.score, result.comment) == (4, "fine")


@pytest.mark.asyncio
async def test_delete_missing_pair_is_not_found_and_mutates_nothing(service, ratings):
    ratings.add(1, 7, 4)
    with pytest.raises(NotFoundError) as exc_info:
        await service.delete_rating(1, 8)
    assert exc_info.value.message == "Tour-Rating pair for request(1 for customer8)"
    assert "delete" not in ratings.calls
    assert list(ratings.rows) == [TourRatingPk(1, 7)]


@pytest.mark.asyncio
async def test_delete_removes_rating(service, ratings):
    ratings.add(1, 7, 4)
    await service.delete_rating(1, 7)
    assert ratings.rows == {}
