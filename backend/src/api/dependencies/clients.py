from functools import lru_cache

from src.integrations.nivoda.client import NivodaClient
from src.integrations.shopify.client import ShopifyClient


@lru_cache(maxsize=1)
def get_nivoda_client() -> NivodaClient:
    # One instance per process so every request shares the cached token
    return NivodaClient()


@lru_cache(maxsize=1)
def get_shopify_client() -> ShopifyClient:
    return ShopifyClient()
