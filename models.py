import enum
from dataclasses import dataclass

from database import Base
from sqlalchemy import CheckConstraint, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship


class LabelledEnum(str, enum.Enum):
    @classmethod
    def find_by_label(cls, label: str):
        for member in cls:
            if member.value.lower() == label.strip().lower():
                return member
        raise ValueError(f"Unknown {cls.__name__.lower()} '{label}'")


class Difficulty(LabelledEnum):
    """Level of effort a tour demands."""

    Easy = "Easy"
    Medium = "Medium"
    Difficult = "Difficult"
    Varies = "Varies"


class Region(LabelledEnum):
    Central_Coast = "Central Coast"
    Southern_California = "Southern California"
    Northern_California = "Northern California"
    Varies = "Varies"


def _enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


@dataclass(frozen=True)
class TourRatingPk:
    """Identity of a rating: one per (tour, customer) pair."""

    tour_id: int
    customer_id: int


class TourPackage(Base):
    __tablename__ = "tour_packages"

    code: Mapped[str] = mapped_column(String(2), primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)

    tours: Mapped[list["Tour"]] = relationship("Tour", back_populates="tour_package")


class Tour(Base):
    __tablename__ = "tours"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    blurb: Mapped[str | None] = mapped_column(Text)
    price: Mapped[int | None] = mapped_column(Integer)
    duration: Mapped[str | None] = mapped_column(String(32))
    bullets: Mapped[str | None] = mapped_column(Text)
    keywords: Mapped[str | None] = mapped_column(Text)
    tour_package_code: Mapped[str] = mapped_column(
        ForeignKey("tour_packages.code"), nullable=False, index=True
    )
    difficulty: Mapped[Difficulty | None] = mapped_column(
        Enum(Difficulty, name="difficulty", native_enum=False, length=16,
             values_callable=_enum_values)
    )
    region: Mapped[Region | None] = mapped_column(
        Enum(Region, name="region", native_enum=False, length=32,
             values_callable=_enum_values)
    )

    tour_package: Mapped["TourPackage"] = relationship("TourPackage", back_populates="tours")
    ratings: Mapped[list["TourRating"]] = relationship(
        "TourRating", back_populates="tour", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="ck_tours_price_positive"),
    )


class TourRating(Base):
    __tablename__ = "tour_ratings"

    tour_id: Mapped[int] = mapped_column(
        ForeignKey("tours.id", ondelete="CASCADE"), primary_key=True
    )
    customer_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    score: Mapped[int | None] = mapped_column(Integer)
    comment: Mapped[str | None] = mapped_column(String(255))

    pk: Mapped[TourRatingPk] = composite("tour_id", "customer_id")

    tour: Mapped["Tour"] = relationship("Tour", back_populates="ratings")

    __table_args__ = (
        CheckConstraint(
            "score IS NULL OR (score >= 0 AND score <= 5)",
            name="ck_tour_ratings_score_0_5",
        ),
    )
