from enum import Enum

from pydantic import BaseModel, Field


class RatingSortField(str, Enum):
    score = "score"
    customer_id = "customerId"


class RatingDto(BaseModel):
    score: int | None = Field(None, ge=0, le=5)
    comment: str | None = Field(None, max_length=255)
    customer_id: int = Field(..., alias="customerId")

    class Config:
        populate_by_name = True


class RatingPatch(BaseModel):
    """Partial rating update: only the fields sent with a value are applied."""

    score: int | None = Field(None, ge=0, le=5)
    comment: str | None = Field(None, max_length=255)
    customer_id: int = Field(..., alias="customerId")

    class Config:
        populate_by_name = True

    def present_fields(self) -> dict:
        return self.model_dump(
            include={"score", "comment"}, exclude_unset=True, exclude_none=True
        )


class AverageRead(BaseModel):
    average: float | None = None
