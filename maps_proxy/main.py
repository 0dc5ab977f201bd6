from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from prometheus_client import start_http_server

from maps_proxy.config import Settings
from maps_proxy.exceptions import setup_exception_handlers
from maps_proxy.http_client import HttpClient
from maps_proxy.logging_config import configure_logging, log_structured
from maps_proxy.middlewares.cors import setup_cors
from maps_proxy.middlewares.credentials import credentials_middleware
from maps_proxy.middlewares.request_id import request_id_middleware
from maps_proxy.routes import facility_routes, maps_routes
from maps_proxy.services.facility_store import KeyValueStore, build_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    state = app.state
    await state.http_client.start()
    log_structured("HTTP client initialized")

    if state.store is not None:
        await state.store.connect()
    else:
        log_structured("Facility store not configured, facility endpoints degrade to no-ops", level="warning")

    if state.settings.metrics_port:
        start_http_server(state.settings.metrics_port)
        log_structured("Metrics exported", port=state.settings.metrics_port)

    yield

    # Shutdown
    if state.store is not None:
        await state.store.close()
    await state.http_client.stop()
    log_structured("HTTP client closed")


def create_app(
    settings: Optional[Settings] = None,
    http_client: Optional[HttpClient] = None,
    store: Optional[KeyValueStore] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.environment, settings.log_level)

    app = FastAPI(
        title="Maps Proxy",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.http_client = http_client or HttpClient(timeout=settings.request_timeout)
    app.state.store = store if store is not None else build_store(settings)

    # Last registered runs first: request id, then CORS, then the credential check.
    app.middleware("http")(credentials_middleware)
    setup_cors(app)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(maps_routes.router)
    app.include_router(facility_routes.router)
    app.include_router(maps_routes.fallback_router)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
