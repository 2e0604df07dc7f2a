import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.logging import setup_logging

setup_logging(settings.log_level)

from src.api.middleware.cors import setup_cors
from src.api.middleware.request_id import RequestIdMiddleware
from src.api.routes import checkout, diamonds, health

logger = logging.getLogger(__name__)

try:
    settings.validate_config()
except ValueError as e:
    logger.critical("Configuration validation failed: %s", e)
    raise SystemExit(f"FATAL: {e}") from e

if not settings.nivoda_configured:
    logger.warning("NIVODA_USERNAME/NIVODA_PASSWORD not set; diamond search will fail")
if not settings.shopify_configured:
    logger.warning("Shopify not configured; checkout will return cart links only")


app = FastAPI(
    title="Ring Builder Proxy",
    version=health.VERSION,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected invalid body on %s %s", request.method, request.url.path)
    # Rejected input is not echoed back; it may hold values JSON cannot encode
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request body", "errors": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )

setup_cors(app)
app.add_middleware(RequestIdMiddleware)

app.include_router(health.router)
app.include_router(diamonds.router)
app.include_router(checkout.router)
