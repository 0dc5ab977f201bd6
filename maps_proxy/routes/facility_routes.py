from typing import Optional

from fastapi import APIRouter, Depends, Request

from maps_proxy.dependencies import get_facility_service
from maps_proxy.exceptions import BadRequestError
from maps_proxy.services.facility_service import FacilityService, parse_save_request

router = APIRouter(prefix="/facilities")


@router.post("/save")
async def save_facility(request: Request, facilities: FacilityService = Depends(get_facility_service)):
    try:
        body = await request.json()
    except ValueError:
        raise BadRequestError("Request body must be valid JSON")

    await facilities.save(parse_save_request(body))
    return {"success": True, "message": "Facility data saved"}


@router.get("/get")
async def get_facility(key: Optional[str] = None, facilities: FacilityService = Depends(get_facility_service)):
    data = await facilities.get(key)
    return {"success": True, "data": data}


@router.get("/get-all")
async def get_all_facilities(facilities: FacilityService = Depends(get_facility_service)):
    data = await facilities.get_all()
    return {"success": True, "data": data}
