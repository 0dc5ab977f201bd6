from fastapi import Request
from fastapi.responses import JSONResponse

from maps_proxy.exceptions import ConfigurationError
from maps_proxy.logging_config import log_structured


async def credentials_middleware(request: Request, call_next):
    if not request.app.state.settings.maps_api_key:
        error = ConfigurationError("Google Maps API key not configured")
        log_structured(error.error, level="error", path=request.url.path)
        return JSONResponse(status_code=error.status_code, content=error.to_content())
    return await call_next(request)
