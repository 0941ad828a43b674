from typing import Optional

from fastapi import APIRouter, Depends, Query

from places_relay.core.config import settings
from places_relay.core.exceptions import MissingInputError
from places_relay.core.places_client import GooglePlacesClient
from places_relay.services.search_service import SearchService

router = APIRouter()

# --- Dependency Injection ---
def get_places_client() -> GooglePlacesClient:
    return GooglePlacesClient()

def get_search_service(client: GooglePlacesClient = Depends(get_places_client)) -> SearchService:
    return SearchService(client, api_key=settings.GOOGLE_API_KEY)

@router.get("/search")
async def search_endpoint(
    query: Optional[str] = None,
    type: Optional[str] = Query(None, description="'all' fans out across every category"),
    radius: Optional[int] = Query(None, ge=1, description="Search radius in meters"),
    page: Optional[int] = Query(None, ge=1),
    pagetoken: Optional[str] = None,
    key: Optional[str] = Query(None, description="Overrides the configured Google API key"),
    service: SearchService = Depends(get_search_service),
):
    return await service.search(
        query=query,
        place_type=type,
        radius=radius,
        page=page,
        pagetoken=pagetoken,
        api_key=key,
    )

@router.get("/place-details")
async def place_details_endpoint(
    place_id: Optional[str] = None,
    fields: Optional[str] = None,
    key: Optional[str] = None,
    service: SearchService = Depends(get_search_service),
):
    api_key = service.resolve_key(key)
    if not place_id:
        raise MissingInputError("place_id")
    return await service.client.place_details(place_id, api_key, fields)
