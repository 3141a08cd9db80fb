"""Catalog routes — cities, hotels, attractions and their reviews."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from turismo.application.services.catalog_service import get_city_detail, get_hotel_detail
from turismo.application.services.review_service import submit_review
from turismo.application.services.session_store import SessionStore
from turismo.domain.schemas.catalog import AttractionRead, CityDetail, CityRead, HotelDetail, HotelRead
from turismo.domain.schemas.review import ReviewRead
from turismo.infrastructure.tourism_api import TourismAPIClient
from turismo.interfaces.api.deps import get_api, get_session

router = APIRouter(tags=["Catalog"])


class ReviewForm(BaseModel):
    rating: int
    comment: str = ""


@router.get("/cities", response_model=list[CityRead])
async def list_cities(api: TourismAPIClient = Depends(get_api)):
    return await api.get_cities()


@router.get("/cities/{city_id}", response_model=CityDetail)
async def city_detail(city_id: str, api: TourismAPIClient = Depends(get_api)):
    return await get_city_detail(api, city_id)


@router.post("/cities/{city_id}/reviews", response_model=list[ReviewRead])
async def review_city(
    city_id: str,
    body: ReviewForm,
    session: SessionStore = Depends(get_session),
    api: TourismAPIClient = Depends(get_api),
):
    return await submit_review(session, api, body.rating, body.comment, city_id=city_id)


@router.get("/hotels", response_model=list[HotelRead])
async def list_hotels(api: TourismAPIClient = Depends(get_api)):
    return await api.get_hotels()


@router.get("/hotels/{hotel_id}", response_model=HotelDetail)
async def hotel_detail(hotel_id: str, api: TourismAPIClient = Depends(get_api)):
    return await get_hotel_detail(api, hotel_id)


@router.post("/hotels/{hotel_id}/reviews", response_model=list[ReviewRead])
async def review_hotel(
    hotel_id: str,
    body: ReviewForm,
    session: SessionStore = Depends(get_session),
    api: TourismAPIClient = Depends(get_api),
):
    return await submit_review(session, api, body.rating, body.comment, hotel_id=hotel_id)


@router.get("/attractions", response_model=list[AttractionRead])
async def list_attractions(api: TourismAPIClient = Depends(get_api)):
    return await api.get_attractions()


@router.get("/attractions/{attraction_id}", response_model=AttractionRead)
async def attraction_detail(attraction_id: str, api: TourismAPIClient = Depends(get_api)):
    return await api.get_attraction(attraction_id)
