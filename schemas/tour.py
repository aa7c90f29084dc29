from pydantic import BaseModel

from models import Difficulty, Region


class TourPackageRead(BaseModel):
    code: str
    name: str

    class Config:
        from_attributes = True


class TourRead(BaseModel):
    id: int
    title: str
    description: str | None = None
    blurb: str | None = None
    price: int | None = None
    duration: str | None = None
    bullets: str | None = None
    keywords: str | None = None
    tour_package_code: str
    difficulty: Difficulty | None = None
    region: Region | None = None

    class Config:
        from_attributes = True


class TourImportRecord(BaseModel):
    """One entry of an Explore California style import file."""

    packageType: str
    title: str
    description: str | None = None
    blurb: str | None = None
    price: int | None = None
    length: str | None = None
    bullets: str | None = None
    keywords: str | None = None
    difficulty: str | None = None
    region: str | None = None
