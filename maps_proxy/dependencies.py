"""FastAPI dependencies resolving services from the application state."""

from fastapi import Request

from maps_proxy.services.facility_service import FacilityService
from maps_proxy.services.maps_service import MapsService


def get_maps_service(request: Request) -> MapsService:
    state = request.app.state
    return MapsService(state.settings, state.http_client)


def get_facility_service(request: Request) -> FacilityService:
    return FacilityService(request.app.state.store)
