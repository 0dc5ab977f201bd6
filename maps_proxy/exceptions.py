from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from maps_proxy.logging_config import log_structured
from maps_proxy.middlewares.cors import CORS_HEADERS


class ProxyError(Exception):
    """Base error rendered as a JSON body carrying at least an ``error`` field."""

    status_code = 500

    def __init__(self, error: str, status_code: int = None, **extra):
        super().__init__(error)
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def to_content(self) -> dict:
        return {"error": self.error, **self.extra}


class ConfigurationError(ProxyError):
    status_code = 500


class BadRequestError(ProxyError):
    status_code = 400


class UpstreamTransportError(ProxyError):
    status_code = 500

    def __init__(self, error: str, exc: Exception):
        super().__init__(error, details=str(exc) or exc.__class__.__name__)


class UpstreamHTTPError(ProxyError):
    def __init__(self, error: str, status_code: int, status_text: str, body: str):
        super().__init__(error, status_code=status_code, status=status_code, statusText=status_text, details=body)


class UpstreamStatusError(ProxyError):
    status_code = 400


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        log_structured(
            "Request failed",
            level="warning" if exc.status_code < 500 else "error",
            path=request.url.path,
            status_code=exc.status_code,
            error=exc.error,
            error_type=exc.__class__.__name__,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Rendered outside the middleware stack, so CORS headers are set here.
        log_structured("Unhandled exception", level="error", error=str(exc), path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"}, headers=CORS_HEADERS)
