import time
import uuid

from fastapi import Request

from maps_proxy.logging_config import log_structured
from maps_proxy.metrics import REQUEST_COUNT, REQUEST_LATENCY


async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id

    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    log_structured("Request processed", method=request.method, path=request.url.path, status_code=response.status_code, process_time=process_time, request_id=request_id)

    # Label by route template so the fallback route cannot grow the label set.
    route = request.scope.get("route")
    endpoint = getattr(route, "path", None) or "unmatched"

    REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status_code=response.status_code).inc()
    REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint, status_code=response.status_code).observe(process_time)

    return response
