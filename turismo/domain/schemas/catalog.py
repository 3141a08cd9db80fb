"""Pydantic schemas for the catalog: cities, hotels and attractions."""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from turismo.domain.schemas.base import CamelModel
from turismo.domain.schemas.review import ReviewRead


class CityBase(CamelModel):
    name: str
    description: str = ""
    image: Optional[str] = None


class CityCreate(CityBase):
    pass


class CityRead(CityBase):
    id: str
    created_at: Optional[datetime] = None


class HotelBase(CamelModel):
    name: str
    description: str = ""
    # the original payload calls the nightly rate "price"
    price_per_night: float = Field(
        gt=0,
        validation_alias=AliasChoices("pricePerNight", "price_per_night", "price"),
        serialization_alias="pricePerNight",
    )
    city_id: str
    address: Optional[str] = None
    image: Optional[str] = None


class HotelCreate(HotelBase):
    pass


class HotelRead(HotelBase):
    id: str
    rating: Optional[float] = None
    city: Optional[CityRead] = None
    created_at: Optional[datetime] = None


class AttractionRead(CamelModel):
    id: str
    name: str
    description: str = ""
    city_id: str
    image: Optional[str] = None
    city: Optional[CityRead] = None
    created_at: Optional[datetime] = None


class CityDetail(CamelModel):
    city: CityRead
    hotels: list[HotelRead]
    reviews: list[ReviewRead]


class HotelDetail(CamelModel):
    hotel: HotelRead
    reviews: list[ReviewRead]

