"""Pydantic schemas for Review."""

from datetime import datetime
from typing import Optional

from pydantic import model_validator

from turismo.domain.schemas.auth import UserRead
from turismo.domain.schemas.base import CamelModel


class ReviewCreate(CamelModel):
    rating: int
    comment: str
    hotel_id: Optional[str] = None
    city_id: Optional[str] = None

    @model_validator(mode="after")
    def _single_target(self):
        if (self.hotel_id is None) == (self.city_id is None):
            raise ValueError("a review targets exactly one of hotelId or cityId")
        return self


class ReviewRead(CamelModel):
    id: str
    rating: int
    comment: str = ""
    user_id: Optional[str] = None
    user: Optional[UserRead] = None
    hotel_id: Optional[str] = None
    city_id: Optional[str] = None
    created_at: Optional[datetime] = None
