from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from src.core.config import settings
from src.models.dto.health import HealthDetailedResponse

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


def _check_nivoda() -> dict:
    if not settings.nivoda_configured:
        return {"status": "not_configured"}
    return {"status": "configured", "schema": settings.nivoda_schema}


def _check_shopify() -> dict:
    if not settings.shopify_configured:
        # Checkout still works, but only returns cart links
        return {"status": "not_configured", "mode": "cart_link"}
    checks = {"status": "configured", "mode": "draft_order"}
    if not settings.shopify_diamond_product_id:
        checks["warning"] = "diamond product id missing"
    return checks


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    return "Ring builder proxy is running."


@router.get("/health", response_model=HealthDetailedResponse)
async def health_check():
    checks = {
        "nivoda": _check_nivoda(),
        "shopify": _check_shopify(),
    }
    overall = "healthy" if checks["nivoda"]["status"] == "configured" else "degraded"
    return {
        "status": overall,
        "version": VERSION,
        "checks": checks,
    }
