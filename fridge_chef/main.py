import logging
from urllib.parse import urlparse

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from fridge_chef import __version__
from fridge_chef.api import auth, recipes, resources, scans
from fridge_chef.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Fridge Chef", version=__version__)


# =============================================================================
# CSRF Origin Validation Middleware
# =============================================================================


class CSRFOriginMiddleware(BaseHTTPMiddleware):
    """
    Validate Origin/Referer headers on state-changing requests to prevent CSRF.

    - POST, PUT, PATCH, DELETE must include a matching Origin or Referer header
    - GET, HEAD, OPTIONS are always allowed (safe methods)
    - Health check endpoints are exempt
    """

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
    EXEMPT_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.SAFE_METHODS:
            return await call_next(request)

        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        expected_host = request.headers.get("host", "")

        # Origin takes precedence over Referer
        for header in ("origin", "referer"):
            value = request.headers.get(header)
            if not value:
                continue
            if urlparse(value).netloc != expected_host:
                logger.warning(
                    "CSRF %s mismatch: %s=%s, expected=%s, path=%s",
                    header,
                    header,
                    value,
                    expected_host,
                    request.url.path,
                )
                return self._reject()
            return await call_next(request)

        logger.warning(
            "CSRF missing origin/referer: method=%s, path=%s",
            request.method,
            request.url.path,
        )
        return self._reject()

    @staticmethod
    def _reject() -> JSONResponse:
        return JSONResponse(
            status_code=403,
            content={"detail": "Origin validation failed"},
        )


app.add_middleware(CSRFOriginMiddleware)

# Include routers
app.include_router(auth.router)
app.include_router(resources.router)
app.include_router(recipes.router)
app.include_router(scans.router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.exception_handler(RequestValidationError)
async def body_validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Recipe generation callers always get {"error": str}, even for a body
    that is not JSON or has a non-string ``ingredients``.
    """
    if request.url.path == "/resources/generate-recipes":
        logger.info("Rejected generate-recipes body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    # For all other routes, return FastAPI's default 422
    return await request_validation_exception_handler(request, exc)
