import asyncio
import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError, field_validator

from maps_proxy.exceptions import BadRequestError, UpstreamTransportError
from maps_proxy.logging_config import log_structured
from maps_proxy.metrics import UPSTREAM_REQUEST_COUNT
from maps_proxy.services.facility_store import KeyValueStore


class FacilitySaveRequest(BaseModel):
    facilityKey: str
    facilityData: Any

    @field_validator("facilityKey")
    @classmethod
    def key_not_empty(cls, v):
        if not v:
            raise ValueError("facilityKey must not be empty")
        return v

    @field_validator("facilityData")
    @classmethod
    def data_present(cls, v):
        if v is None:
            raise ValueError("facilityData must not be null")
        return v


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def loads_record(value: str) -> Any:
    """Deserialize stored text, refusing NaN and Infinity."""
    return json.loads(value, parse_constant=_reject_constant)


def parse_save_request(body: Any) -> FacilitySaveRequest:
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    try:
        return FacilitySaveRequest.model_validate(body)
    except ValidationError as e:
        raise BadRequestError("facilityKey and facilityData are required", details=str(e))


class FacilityService:
    """Facility records on top of an optional key-value store.

    Without a store, saves are dropped and reads come back empty instead of
    failing.
    """

    def __init__(self, store: Optional[KeyValueStore]):
        self.store = store

    async def save(self, request: FacilitySaveRequest) -> None:
        try:
            value = json.dumps(request.facilityData, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise BadRequestError("facilityData must be valid JSON", details=str(e))

        if self.store is None:
            log_structured("Facility store not configured, skipping save", level="warning", key=request.facilityKey)
            return

        try:
            await self.store.put(request.facilityKey, value)
        except Exception as e:
            UPSTREAM_REQUEST_COUNT.labels(operation="facility_save", outcome="error").inc()
            raise UpstreamTransportError("Failed to save facility data", e)
        UPSTREAM_REQUEST_COUNT.labels(operation="facility_save", outcome="ok").inc()
        log_structured("Facility saved", key=request.facilityKey)

    async def get(self, key: Optional[str]) -> Any:
        if not key:
            raise BadRequestError("key parameter is required")
        if self.store is None:
            return None

        try:
            value = await self.store.get(key)
            return loads_record(value) if value is not None else None
        except Exception as e:
            UPSTREAM_REQUEST_COUNT.labels(operation="facility_get", outcome="error").inc()
            raise UpstreamTransportError("Failed to load facility data", e)

    async def get_all(self) -> Dict[str, Any]:
        if self.store is None:
            return {}

        try:
            keys = await self.store.list_keys()
        except Exception as e:
            UPSTREAM_REQUEST_COUNT.labels(operation="facility_list", outcome="error").inc()
            raise UpstreamTransportError("Failed to load facility data", e)

        results = await asyncio.gather(*(self._read(key) for key in keys), return_exceptions=True)

        facilities = {}
        for key, result in zip(keys, results):
            if isinstance(result, Exception):
                log_structured("Skipping unreadable facility", level="warning", key=key, error=str(result))
                continue
            if result is not None:
                facilities[key] = result
        return facilities

    async def _read(self, key: str) -> Any:
        value = await self.store.get(key)
        if value is None:
            return None
        return loads_record(value)
