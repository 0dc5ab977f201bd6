from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from maps_proxy.config import GEOCODE_CACHE_CONTROL, PLACES_CACHE_CONTROL, SCRIPT_CACHE_CONTROL
from maps_proxy.dependencies import get_maps_service
from maps_proxy.services.maps_service import MapsService

router = APIRouter()

# Registered last: every path no other route claims loads the maps script.
fallback_router = APIRouter()


async def _script_response(maps: MapsService, callback: Optional[str], libraries: Optional[str]) -> Response:
    script = await maps.load_script(callback, libraries)
    return Response(
        content=script,
        media_type="application/javascript",
        headers={"Cache-Control": SCRIPT_CACHE_CONTROL},
    )


@router.get("/")
@router.get("/maps/js")
async def maps_script(
    callback: Optional[str] = None,
    libraries: Optional[str] = None,
    maps: MapsService = Depends(get_maps_service),
):
    return await _script_response(maps, callback, libraries)


@router.get("/geocode")
async def geocode(address: Optional[str] = None, maps: MapsService = Depends(get_maps_service)):
    payload = await maps.geocode(address)
    return JSONResponse(content=payload, headers={"Cache-Control": GEOCODE_CACHE_CONTROL})


@router.get("/places/search")
async def search_places(query: Optional[str] = None, maps: MapsService = Depends(get_maps_service)):
    payload = await maps.search_places(query)
    return JSONResponse(content=payload, headers={"Cache-Control": PLACES_CACHE_CONTROL})


@router.get("/places/details")
async def place_details(place_id: Optional[str] = None, maps: MapsService = Depends(get_maps_service)):
    payload = await maps.place_details(place_id)
    return JSONResponse(content=payload, headers={"Cache-Control": PLACES_CACHE_CONTROL})


@fallback_router.api_route("/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH"])
async def maps_script_fallback(
    path: str,
    callback: Optional[str] = None,
    libraries: Optional[str] = None,
    maps: MapsService = Depends(get_maps_service),
):
    return await _script_response(maps, callback, libraries)
