"""Catalog service — read-side composition of city and hotel pages."""

import asyncio

from turismo.domain.schemas.catalog import CityDetail, HotelDetail
from turismo.infrastructure.tourism_api import TourismAPIClient


async def get_city_detail(api: TourismAPIClient, city_id: str) -> CityDetail:
    """City page: the city, its hotels and its reviews."""
    city, hotels, reviews = await asyncio.gather(
        api.get_city(city_id),
        api.get_hotels(),
        api.get_city_reviews(city_id),
    )
    return CityDetail(
        city=city,
        hotels=[h for h in hotels if h.city_id == city.id],
        reviews=reviews,
    )


async def get_hotel_detail(api: TourismAPIClient, hotel_id: str) -> HotelDetail:
    hotel, reviews = await asyncio.gather(api.get_hotel(hotel_id), api.get_hotel_reviews(hotel_id))
    return HotelDetail(hotel=hotel, reviews=reviews)
