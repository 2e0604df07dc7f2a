import logging
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.middleware.request_id import REQUEST_ID_HEADER
from src.core.config import settings

logger = logging.getLogger(__name__)


def _validate_origins(origins: list[str]) -> None:
    for origin in origins:
        if origin == "*":
            continue
        parsed = urlparse(origin)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid CORS origin: {origin!r}")
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"CORS origin must use http or https: {origin!r}")


def setup_cors(app: FastAPI) -> None:
    origins = settings.cors_origins_list
    _validate_origins(origins)
    if "*" in origins:
        logger.info("CORS open to all origins")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed responses with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
        max_age=600,
    )
