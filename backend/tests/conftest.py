import pytest

from tests.factories import FakeClock


# ── Patch settings before any other import ──────────────────────────────────
@pytest.fixture(autouse=True)
def _patch_settings(monkeypatch):
    from src.core.config import settings
    monkeypatch.setattr(settings, "nivoda_endpoint", "https://nivoda.test/api/diamonds")
    monkeypatch.setattr(settings, "nivoda_username", "ringbuilder")
    monkeypatch.setattr(settings, "nivoda_password", "test-password")
    monkeypatch.setattr(settings, "nivoda_schema", "v4")
    monkeypatch.setattr(settings, "nivoda_request_total_count", False)
    monkeypatch.setattr(settings, "shopify_store_domain", "ring-shop.myshopify.com")
    monkeypatch.setattr(settings, "shopify_admin_token", "shpat_test")
    monkeypatch.setattr(settings, "shopify_diamond_product_id", "8000000000001")
    monkeypatch.setattr(settings, "storefront_url", "")


@pytest.fixture
def clock():
    return FakeClock()
