"""Review service — guarded review submission for a hotel or a city."""

from typing import Optional

import structlog

from turismo.application.services.session_store import SessionStore
from turismo.core.exceptions import AuthRequiredError, InvalidRatingError
from turismo.domain.schemas.review import ReviewCreate, ReviewRead
from turismo.infrastructure.tourism_api import TourismAPIClient

logger = structlog.get_logger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(rating) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError()
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRatingError()
    return rating


async def submit_review(
    session: SessionStore,
    api: TourismAPIClient,
    rating: int,
    comment: str,
    hotel_id: Optional[str] = None,
    city_id: Optional[str] = None,
) -> list[ReviewRead]:
    """
    Post a review and return the target's refreshed review list.

    Exactly one of hotel_id / city_id must be given.
    """
    if (hotel_id is None) == (city_id is None):
        raise ValueError("submit_review needs exactly one of hotel_id or city_id")
    if not session.is_authenticated:
        raise AuthRequiredError("Você precisa estar logado para deixar uma avaliação")

    review = ReviewCreate(
        rating=validate_rating(rating),
        comment=comment,
        hotel_id=hotel_id,
        city_id=city_id,
    )
    created = await api.create_review(review)
    logger.info("Review created", review_id=created.id, hotel_id=hotel_id, city_id=city_id)

    if hotel_id is not None:
        return await api.get_hotel_reviews(hotel_id)
    return await api.get_city_reviews(city_id)
